import struct

import pytest

from sioutil.audio import WavInfo, convert_wav_to_pcm, pcm_to_wav


def test_pcm_to_wav_header_layout():
    pcm = bytes(range(10))
    wav = pcm_to_wav(pcm, 16000, 1)
    assert len(wav) == 44 + len(pcm)
    assert wav[0:4] == b"RIFF"
    assert wav[8:12] == b"WAVE"
    assert wav[12:16] == b"fmt "
    assert wav[36:40] == b"data"
    assert wav[44:] == pcm


def test_pcm_to_wav_sizes():
    pcm = b"\x01\x02" * 8
    wav = pcm_to_wav(pcm, 22050, 2)
    (riff_size,) = struct.unpack_from("<I", wav, 4)
    (data_size,) = struct.unpack_from("<I", wav, 40)
    assert riff_size == len(wav) - 8
    assert data_size == len(pcm)


@pytest.mark.parametrize("rate,channels", [(16000, 1), (44100, 2), (48000, 1)])
def test_round_trip(rate, channels):
    pcm = bytes(i % 256 for i in range(400))
    info = convert_wav_to_pcm(pcm_to_wav(pcm, rate, channels))
    assert info.pcm == pcm
    assert info.sample_rate == rate
    assert info.channels == channels
    assert info.bits_per_sample == 16


def test_extra_chunk_before_data_is_skipped():
    pcm = b"\x10\x20" * 20
    wav = pcm_to_wav(pcm, 8000, 1)
    extra = b"LIST" + struct.pack("<I", 4) + b"abcd"
    patched = wav[:36] + extra + wav[36:]
    patched = patched[:4] + struct.pack("<I", len(patched) - 8) + patched[8:]
    assert convert_wav_to_pcm(patched).pcm == pcm


def test_empty_data_chunk():
    info = convert_wav_to_pcm(pcm_to_wav(b"", 16000, 1))
    assert info.pcm == b""
    assert info.duration() == 0.0


def test_too_small():
    with pytest.raises(ValueError, match="too small"):
        convert_wav_to_pcm(b"RIFF")


def test_missing_riff():
    wav = bytearray(pcm_to_wav(b"\x00" * 8, 16000, 1))
    wav[0:4] = b"RIFX"
    with pytest.raises(ValueError, match="RIFF"):
        convert_wav_to_pcm(bytes(wav))


def test_missing_wave():
    wav = bytearray(pcm_to_wav(b"\x00" * 8, 16000, 1))
    wav[8:12] = b"AVI "
    with pytest.raises(ValueError, match="WAVE"):
        convert_wav_to_pcm(bytes(wav))


def test_missing_fmt_chunk():
    wav = bytearray(pcm_to_wav(b"\x00" * 8, 16000, 1))
    wav[12:16] = b"junk"
    with pytest.raises(ValueError, match="'fmt'"):
        convert_wav_to_pcm(bytes(wav))


def test_non_pcm_format_rejected():
    wav = bytearray(pcm_to_wav(b"\x00" * 8, 16000, 1))
    wav[20:22] = struct.pack("<h", 3)
    with pytest.raises(ValueError, match="only PCM"):
        convert_wav_to_pcm(bytes(wav))


def test_missing_data_chunk():
    wav = bytearray(pcm_to_wav(b"\x00" * 8, 16000, 1))
    wav[36:40] = b"nope"
    with pytest.raises(ValueError, match="'data'"):
        convert_wav_to_pcm(bytes(wav))


def test_data_size_mismatch():
    wav = bytearray(pcm_to_wav(b"\x00" * 8, 16000, 1))
    wav[40:44] = struct.pack("<i", 1000)
    with pytest.raises(ValueError, match="size mismatch"):
        convert_wav_to_pcm(bytes(wav))


def test_duration_one_second():
    info = WavInfo(pcm=b"\x00" * 32000, sample_rate=16000, channels=1, bits_per_sample=16)
    assert info.duration() == pytest.approx(1.0)


def test_duration_scales_with_channels():
    mono = WavInfo(pcm=b"\x00" * 4000, sample_rate=8000, channels=1, bits_per_sample=16)
    stereo = WavInfo(pcm=b"\x00" * 4000, sample_rate=8000, channels=2, bits_per_sample=16)
    assert stereo.duration() == pytest.approx(mono.duration() / 2)


def test_duration_zero_when_degenerate():
    info = WavInfo(pcm=b"\x00" * 100, sample_rate=0, channels=1, bits_per_sample=16)
    assert info.duration() == 0.0