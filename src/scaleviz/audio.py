"""Tone output via FluidSynth + SoundFonts."""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path

import fluidsynth

from scaleviz.config import SYNTH_GAIN, TONE_DURATION_S, TONE_VELOCITY
from scaleviz.pitch import Note

logger = logging.getLogger(__name__)


def _detect_audio_driver() -> str:
    """Auto-detect the appropriate FluidSynth audio driver for the platform."""
    if sys.platform == "linux":
        return "pulseaudio"
    elif sys.platform == "darwin":
        return "coreaudio"
    elif sys.platform == "win32":
        return "dsound"
    return "alsa"


class AudioEngine:
    """Plays short piano tones; satisfies the engine's ToneOutput protocol."""

    def __init__(
        self,
        soundfont_path: str | Path | None = None,
        tone_duration: float = TONE_DURATION_S,
        velocity: int = TONE_VELOCITY,
    ) -> None:
        self.fs = fluidsynth.Synth(gain=SYNTH_GAIN)
        self.fs.start(driver=_detect_audio_driver())
        self.tone_duration = tone_duration
        self.velocity = velocity
        self._sfid: int | None = None
        self._pending_offs: list[tuple[float, int, int]] = []  # (off_time, midi, channel)
        if soundfont_path:
            self.load_soundfont(soundfont_path)

    def load_soundfont(self, path: str | Path) -> None:
        self._sfid = self.fs.sfload(str(path))
        self.fs.program_select(0, self._sfid, 0, 0)
        logger.info("Loaded soundfont %s", path)

    def note_on(self, note: Note, velocity: int | None = None, channel: int = 0) -> None:
        self.fs.noteon(channel, note.midi_number, velocity or self.velocity)

    def note_off(self, note: Note, channel: int = 0) -> None:
        self.fs.noteoff(channel, note.midi_number)

    def play_tone(self, pitch_class: int, octave: int) -> None:
        """Sound one note for ``tone_duration`` seconds."""
        note = Note(pitch_class, octave)
        self.note_on(note)
        self._pending_offs.append((time.time() + self.tone_duration, note.midi_number, 0))

    def flush_pending_offs(self) -> None:
        """Call each frame to release notes whose duration has elapsed."""
        now = time.time()
        remaining: list[tuple[float, int, int]] = []
        for off_time, midi_number, channel in self._pending_offs:
            if now >= off_time:
                self.fs.noteoff(channel, midi_number)
            else:
                remaining.append((off_time, midi_number, channel))
        self._pending_offs = remaining

    def all_notes_off(self) -> None:
        for pitch in range(128):
            self.fs.noteoff(0, pitch)
        self._pending_offs.clear()

    def shutdown(self) -> None:
        self.all_notes_off()
        self.fs.delete()
