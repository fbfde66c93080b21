"""Tests for sound synthesis and the QSoundEffect-backed manager."""

import io
import logging
import wave

import numpy as np
import pytest

from justpomodoro.audio.sounds import (
    DEFAULT_VOLUME,
    SAMPLE_RATE,
    SOUND_NAMES,
    SoundManager,
    _envelope,
    _generate_complete,
    _generate_pause,
    _generate_start,
)


GENERATORS = [_generate_start, _generate_complete, _generate_pause]


# ═══════════════════════════════════════════════════════════════════════
#  SOUND SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════


class TestSoundGeneration:

    @pytest.mark.parametrize("gen_fn", GENERATORS)
    def test_generator_produces_wav(self, gen_fn):
        data = gen_fn()
        assert isinstance(data, bytes)
        assert len(data) > 100
        assert data[:4] == b"RIFF"

    @pytest.mark.parametrize("gen_fn", GENERATORS)
    def test_wav_is_parseable(self, gen_fn):
        with wave.open(io.BytesIO(gen_fn()), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == SAMPLE_RATE
            # every cue is short
            assert 0 < wf.getnframes() < SAMPLE_RATE

    def test_envelope_shape(self):
        env = _envelope(4000, attack=100, decay=100, sustain_level=0.5, release=1000)
        assert env[0] == 0.0
        assert env[99] == pytest.approx(1.0)
        assert env[1500] == pytest.approx(0.5)
        assert env[-1] == pytest.approx(0.0)
        assert np.all((env >= 0.0) & (env <= 1.0))

    def test_envelope_shorter_than_attack(self):
        env = _envelope(50, attack=200)
        assert len(env) == 50
        assert env[-1] <= 1.0


# ═══════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestSoundManager:

    def test_wav_files_generated(self, tmp_path):
        SoundManager(parent=None, sounds_dir=tmp_path)
        for name in SOUND_NAMES:
            path = tmp_path / f"{name}.wav"
            assert path.exists(), f"Missing WAV: {name}"
            assert path.stat().st_size > 100

    def test_existing_files_kept(self, tmp_path):
        marker = tmp_path / "session_start.wav"
        marker.write_bytes(_generate_pause())
        SoundManager(parent=None, sounds_dir=tmp_path)
        assert marker.read_bytes() == _generate_pause()

    def test_all_sounds_loaded(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        assert set(mgr.loaded) == set(SOUND_NAMES)

    def test_volume(self, tmp_path):
        assert SoundManager(sounds_dir=tmp_path).volume == DEFAULT_VOLUME
        assert SoundManager(sounds_dir=tmp_path, volume=3.0).volume == 1.0
        assert SoundManager(sounds_dir=tmp_path, volume=-1.0).volume == 0.0

    def test_play_api_no_crash(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.play_start()
        mgr.play_pause()
        mgr.play_completion()

    def test_play_invalid_name_no_crash(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.play("nonexistent_sound")

    def test_unwritable_cache_dir(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with caplog.at_level(logging.WARNING, logger="justpomodoro.audio.sounds"):
            mgr = SoundManager(parent=None, sounds_dir=blocker / "sounds")
        assert mgr.loaded == ()
        assert "Could not write sound cache" in caplog.text
        mgr.play_completion()
