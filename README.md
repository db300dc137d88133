# sioutil

Small, dependency-free building blocks for Socket.IO style clients and the
tooling around them.

## Modules

- `sioutil.message` — a typed message tree (`NullMessage`, `BoolMessage`,
  `IntMessage`, `DoubleMessage`, `StringMessage`, `BinaryMessage`,
  `ArrayMessage`, `ObjectMessage`), each with a `flag` of type `Flag`.
  Accessors such as `get_int()` or `get_map()` raise `TypeError` on a message
  of another kind. `MessageList` holds event arguments and builds an
  `ArrayMessage` with `to_array_message(event_name)`. `to_message()` builds a
  tree from plain Python values.
- `sioutil.timer` — named measurement timers: `tick()` and `tock()` on a
  shared timer, `MeasureTimer` for a private set, and the `ScopeTimer`
  context manager. `tock()` returns elapsed milliseconds and returns 0.0
  (logging a warning) for a category that was never started. Results are
  reported through the `logging` module.
- `sioutil.runnable` — `run_on_background_thread()` and `run_on_thread_pool()`
  return futures; `MainThreadDispatcher` queues callables with `post()` until
  its owner calls `process_pending()`; `set_timeout()` calls back after a
  delay; `LatentAction` is a completion flag with `call()`, `cancel()`,
  `is_done()`, `wait()` and `description()`.
- `sioutil.opus_stream` — the minimal Opus packet layout (uint32 packet
  count, int16 packet sizes, then packet bytes, all little-endian):
  `OpusMinimalStream`, `serialize_minimal()`, `deserialize_minimal()`;
  `OpusCoderConfig` with its frame-size arithmetic; `iter_pcm_frames()`
  (zero-pads the last frame) and `iter_packets()`.
- `sioutil.audio` — `convert_wav_to_pcm()` returns a `WavInfo` (PCM bytes,
  sample rate, channels, bits per sample, `duration()`) and raises
  `ValueError` for anything but a PCM WAV file; `pcm_to_wav()` wraps 16-bit
  PCM in a 44-byte header.
- `sioutil.files` — `FileStore` for saving, reading and deleting files
  relative to a project directory (with `Content/` and `Saved/` beneath it by
  default), and `split_full_path()`. Save and read failures raise `OSError`.
- `sioutil.convert` — `bytes_to_string()` (honours UTF-8 and UTF-16 byte
  order marks) and `string_to_bytes()`; `compact_bytes_to_transforms()` and
  `compact_position_bytes_to_transforms()` read little-endian float32 groups
  into `Transform` values; `now_utc_string()` and `get_login_id()`.
- `sioutil.calls` — `call_function_on_thread()` and
  `call_function_on_thread_graph_return()` call a named method of an object
  on a chosen `CallbackType` of thread, the latter then marking a
  `LatentAction` done.

## Installation

```
pip install .
```

## Examples

Build and inspect a message:

```python
from sioutil.message import to_message, MessageList, Flag

msg = to_message({"name": "probe", "values": [1, 2.5, True], "blob": b"\x00\x01"})
assert msg.flag is Flag.OBJECT
assert msg["values"][0].get_int() == 1

args = MessageList()
args.push("hello")
event = args.to_array_message("chat")
assert event[0].get_string() == "chat"
```

Round-trip audio through WAV:

```python
from sioutil.audio import pcm_to_wav, convert_wav_to_pcm

wav = pcm_to_wav(b"\x00\x00" * 160, 16000, 1)
info = convert_wav_to_pcm(wav)
print(info.sample_rate, info.channels, info.bits_per_sample, len(info.pcm))
```

Frame an Opus stream:

```python
from sioutil.opus_stream import OpusMinimalStream, serialize_minimal, deserialize_minimal

stream = OpusMinimalStream(packet_sizes=[3, 2], compressed_bytes=b"abcde")
assert deserialize_minimal(serialize_minimal(stream)) == stream
```

Time a block:

```python
from sioutil.timer import ScopeTimer

with ScopeTimer("load") as timer:
    ...
print(timer.elapsed)
```

## What this package does not do

- It has no Socket.IO client: it does not open connections, emit events or
  receive them. `sioutil.message` only models the values such a client sends.
- It does not encode or decode Opus audio. `sioutil.opus_stream` frames PCM
  and splits or joins already compressed packets; a codec is needed for the
  rest.
- It does not decode images or play sound; WAV handling stops at the bytes.
- It provides no command-line program.

## Running the tests

```
pip install .[test]
pytest
```