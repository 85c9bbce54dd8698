# soundweave

Streams of audio samples in plain Python, with no third-party dependencies.
A *source* is an iterator of interleaved PCM samples that also reports its
channel count, sample rate, sample format, the number of samples left in
the current frame and, when it is known, its total duration.

## Modules

- `soundweave.sample`: `SampleFormat` (`I16`, `U16`, `F32`) with
  `lerp`, `amplify`, `saturating_add`, `zero_value`, `to_f32`, `from_f32`
  and `convert`. `DataConverter` converts every sample of a stream from one
  format to another.
- `soundweave.channels`: `ChannelCountConverter` changes the channel count
  of interleaved samples. Extra channels are dropped, and missing ones repeat
  the last input channel of the frame.
- `soundweave.sample_rate`: `SampleRateConverter` resamples by linear
  interpolation between neighbouring frames.
- `soundweave.source`: the abstract `Source` base class and `SeekError`.
- `soundweave.buffer`: `SamplesBuffer(channels, sample_rate, data,
  sample_format)` plays a list of samples. A zero channel count or sample
  rate raises `ValueError`. `seek` skips forward from the current position
  and raises `SeekError` past the end.
- `soundweave.dynamic_mixer`: `mixer(channels, sample_rate, sample_format)`
  returns a `DynamicMixerController` and a `DynamicMixer`. Sources added to
  the controller are converted to the mixer's channels, rate and format, and
  they are summed with saturation. A source starts only on a frame boundary.
- `soundweave.queue`: `queue(keep_alive_if_empty, sample_format)` returns a
  `SourcesQueueInput` and a `SourcesQueueOutput`. Sources appended to the
  input play one after the other, and leading silent sample pairs of each
  source are skipped.
- `soundweave.wav`: `is_wave` detects WAV data and restores the stream
  position. `WavDecoder` reads 8, 16, 24 and 32-bit integer and 32-bit float
  WAV data as 16-bit signed samples.
- `soundweave.decoder`: `Decoder` wraps a stream and raises `DecoderError`
  when the data is not WAV. `Decoder.new_looped` gives a `LoopedDecoder`,
  which rewinds the stream each time it reaches the end. `Mp4Type.parse`
  turns an extension of the MP4 family into an enum member.

Most constructors default to `SampleFormat.F32`. Pass `SampleFormat.I16` or
`SampleFormat.U16` for integer samples.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Mixing two buffers

```python
from soundweave.buffer import SamplesBuffer
from soundweave.dynamic_mixer import mixer
from soundweave.sample import SampleFormat

controller, output = mixer(1, 48000, SampleFormat.I16)
controller.add(SamplesBuffer(1, 48000, [10, -10, 10, -10], SampleFormat.I16))
controller.add(SamplesBuffer(1, 48000, [5, 5, 5, 5], SampleFormat.I16))

print(list(output))  # [15, -5, 15, -5]
```

## Playing sounds in sequence

```python
from soundweave.buffer import SamplesBuffer
from soundweave.queue import queue
from soundweave.sample import SampleFormat

tx, rx = queue(False, SampleFormat.I16)
tx.append(SamplesBuffer(1, 48000, [10, -10, 10, -10], SampleFormat.I16))
done = tx.append_with_signal(SamplesBuffer(1, 48000, [3, 4], SampleFormat.I16))

print(list(rx))        # [10, -10, 10, -10, 3, 4]
print(done.is_set())   # True
```

`append_with_signal` returns a `threading.Event`, which is set once the
source has finished playing. With `keep_alive_if_empty=True` the output
never ends. It yields silence until another source is appended.
`SourcesQueueInput.clear` removes the sources that have not started yet.

## Decoding a WAV file

```python
from soundweave.decoder import Decoder

with open("beep.wav", "rb") as fh:
    decoder = Decoder(fh)
    print(decoder.channels(), decoder.sample_rate(), decoder.total_duration())
    samples = list(decoder)
```

`WavDecoder.seek` jumps to the start of the whole second the position falls
in.

## What it does not do

- It does not play sound on an audio device. Sources only produce samples
  for your own code to consume.
- WAV is the only file format it decodes. MP3, FLAC, Ogg Vorbis and MP4/AAC
  data all raise `DecoderError`.
- It has no command-line program.