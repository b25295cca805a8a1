import pytest

from rigid2d.clip import Clip


def test_save_load_round_trip(tmp_path):
    clip = Clip(sample_rate=44100, samples=[0.5, -0.25, 1.0], replay=True)
    path = tmp_path / "a.clip"
    clip.save(path)
    loaded = Clip.load(path)
    assert loaded.sample_rate == 44100
    assert loaded.samples == [0.5, -0.25, 1.0]
    assert loaded.replay is True
    assert loaded.position == 0


def test_load_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Clip.load(tmp_path / "none.clip")


def test_load_truncated_raises(tmp_path):
    path = tmp_path / "bad.clip"
    path.write_bytes(b"\x01\x02")
    with pytest.raises(ValueError):
        Clip.load(path)


def test_play_mixes_and_stops():
    clip = Clip(samples=[1.0, 2.0])
    buf = [10.0, 10.0, 10.0]
    clip.play(buf, 0.5)
    assert buf == [10.5, 11.0, 10.0]
    assert clip.position == len(clip)


def test_play_loops_when_replaying():
    clip = Clip(samples=[1.0, 2.0], replay=True)
    buf = [0.0] * 5
    clip.play(buf)
    assert buf == [1.0, 2.0, 1.0, 2.0, 1.0]
    assert clip.position == 1


def test_play_continues_across_calls():
    clip = Clip(samples=[1.0, 2.0, 3.0])
    first, second = [0.0], [0.0, 0.0]
    clip.play(first)
    clip.play(second)
    assert first + second == clip.samples