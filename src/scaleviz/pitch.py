"""Pitch classes, octave-qualified notes, and mod-12 arithmetic."""

from __future__ import annotations

from dataclasses import dataclass

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

SEMITONES_PER_OCTAVE = 12

# A4 = 440 Hz, MIDI 69
_A4_MIDI = 69
_A4_FREQ = 440.0


class InvalidPitchClass(ValueError):
    """Raised when a pitch class is not an integer in 0..11."""


def validate_pitch_class(pitch_class: int) -> int:
    """Return *pitch_class* unchanged, or raise InvalidPitchClass.

    Out-of-range values are rejected rather than wrapped.
    """
    if isinstance(pitch_class, bool) or not isinstance(pitch_class, int):
        raise InvalidPitchClass(f"pitch class must be an int, got {pitch_class!r}")
    if not 0 <= pitch_class < SEMITONES_PER_OCTAVE:
        raise InvalidPitchClass(f"pitch class out of range 0-11: {pitch_class}")
    return pitch_class


def note_name(pitch_class: int) -> str:
    return NOTE_NAMES[validate_pitch_class(pitch_class)]


def floored_divmod(value: int, divisor: int) -> tuple[int, int]:
    """Floored division: the remainder always has the sign of *divisor*."""
    quotient = value // divisor
    return quotient, value - quotient * divisor


def interval_between(lower: int, upper: int) -> int:
    """Ascending distance in semitones from *lower* to *upper*, 0..11."""
    return (upper - lower) % SEMITONES_PER_OCTAVE


def transpose(pitch_class: int, semitones: int) -> int:
    return (pitch_class + semitones) % SEMITONES_PER_OCTAVE


@dataclass(frozen=True)
class Note:
    """A pitch class in a specific octave (C4 = middle C)."""

    pitch_class: int
    octave: int

    def __post_init__(self) -> None:
        validate_pitch_class(self.pitch_class)

    @classmethod
    def from_midi(cls, midi_number: int) -> Note:
        octave, pitch_class = floored_divmod(midi_number, SEMITONES_PER_OCTAVE)
        return cls(pitch_class=pitch_class, octave=octave - 1)

    @property
    def absolute_semitone(self) -> int:
        return self.octave * SEMITONES_PER_OCTAVE + self.pitch_class

    @property
    def midi_number(self) -> int:
        return self.absolute_semitone + SEMITONES_PER_OCTAVE

    @property
    def frequency(self) -> float:
        """Equal-tempered frequency in Hz."""
        return _A4_FREQ * 2.0 ** ((self.midi_number - _A4_MIDI) / SEMITONES_PER_OCTAVE)

    @property
    def name(self) -> str:
        return f"{NOTE_NAMES[self.pitch_class]}{self.octave}"

    def transposed(self, semitones: int) -> Note:
        octave_shift, pitch_class = floored_divmod(self.pitch_class + semitones, SEMITONES_PER_OCTAVE)
        return Note(pitch_class=pitch_class, octave=self.octave + octave_shift)

    def __str__(self) -> str:
        return self.name
