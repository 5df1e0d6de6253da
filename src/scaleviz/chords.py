"""Diatonic chord construction and quality classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from scaleviz.pitch import NOTE_NAMES, Note, floored_divmod, interval_between

DEGREES_PER_SCALE = 7

ROMAN_NUMERALS = ("I", "II", "III", "IV", "V", "VI", "VII")


class ChordType(Enum):
    TRIADS = auto()
    SEVENTHS = auto()


class ChordQuality(Enum):
    MAJOR = "Major"
    MINOR = "Minor"
    DIMINISHED = "Diminished"
    AUGMENTED = "Augmented"
    MAJOR7 = "Major7"
    MINOR7 = "Minor7"
    DOMINANT7 = "Dominant7"
    HALF_DIMINISHED7 = "HalfDiminished7"
    DIMINISHED7 = "Diminished7"
    UNCLASSIFIED = "Unclassified"


# (third, fifth) intervals above the chord root
_TRIAD_QUALITIES: dict[tuple[int, int], ChordQuality] = {
    (4, 7): ChordQuality.MAJOR,
    (3, 7): ChordQuality.MINOR,
    (3, 6): ChordQuality.DIMINISHED,
    (4, 8): ChordQuality.AUGMENTED,
}

# (third, fifth, seventh)
_SEVENTH_QUALITIES: dict[tuple[int, int, int], ChordQuality] = {
    (4, 7, 11): ChordQuality.MAJOR7,
    (3, 7, 10): ChordQuality.MINOR7,
    (4, 7, 10): ChordQuality.DOMINANT7,
    (3, 6, 10): ChordQuality.HALF_DIMINISHED7,
    (3, 6, 9): ChordQuality.DIMINISHED7,
}

_LOWER_CASE_QUALITIES = {
    ChordQuality.MINOR,
    ChordQuality.DIMINISHED,
    ChordQuality.MINOR7,
    ChordQuality.HALF_DIMINISHED7,
    ChordQuality.DIMINISHED7,
}

_NUMERAL_SUFFIXES = {
    ChordQuality.DIMINISHED: "°",
    ChordQuality.DIMINISHED7: "°7",
    ChordQuality.HALF_DIMINISHED7: "ø7",
    ChordQuality.AUGMENTED: "+",
    ChordQuality.MAJOR7: "maj7",
    ChordQuality.MINOR7: "7",
    ChordQuality.DOMINANT7: "7",
}


@dataclass(frozen=True)
class Chord:
    degree: int  # 1..7
    quality: ChordQuality
    notes: tuple[Note, ...]

    @property
    def root(self) -> Note:
        return self.notes[0]

    @property
    def intervals(self) -> tuple[int, ...]:
        """Intervals of the upper chord tones above the chord root."""
        return tuple(interval_between(self.root.pitch_class, n.pitch_class) for n in self.notes[1:])

    @property
    def pitch_classes(self) -> frozenset[int]:
        return frozenset(n.pitch_class for n in self.notes)

    @property
    def name(self) -> str:
        label = "—" if self.quality == ChordQuality.UNCLASSIFIED else self.quality.value
        return f"{NOTE_NAMES[self.root.pitch_class]} {label}"

    @property
    def roman_numeral(self) -> str:
        numeral = ROMAN_NUMERALS[self.degree - 1]
        if self.quality in _LOWER_CASE_QUALITIES:
            numeral = numeral.lower()
        return numeral + _NUMERAL_SUFFIXES.get(self.quality, "")


def note_at_scale_degree(root: Note, offsets: tuple[int, ...], scale_degree: int) -> Note:
    """Resolve a 0-based scale degree (may leave 0..6) to an octave-qualified note.

    Degrees past the seventh wrap into the next octave; floored division keeps
    negative degrees in the octave below.
    """
    octave_offset, scale_index = floored_divmod(scale_degree, DEGREES_PER_SCALE)
    total_semitones = root.pitch_class + offsets[scale_index]
    octave_carry, pitch_class = floored_divmod(total_semitones, 12)
    return Note(pitch_class=pitch_class, octave=root.octave + octave_carry + octave_offset)


def classify_triad(third: int, fifth: int) -> ChordQuality:
    return _TRIAD_QUALITIES.get((third, fifth), ChordQuality.UNCLASSIFIED)


def classify_seventh(third: int, fifth: int, seventh: int) -> ChordQuality:
    return _SEVENTH_QUALITIES.get((third, fifth, seventh), ChordQuality.UNCLASSIFIED)


def _stack_thirds(root: Note, offsets: tuple[int, ...], degree: int, size: int) -> tuple[Note, ...]:
    # chord root sits at 0-based index degree-1; each further tone is two scale steps up
    return tuple(
        note_at_scale_degree(root, offsets, degree - 1 + 2 * i) for i in range(size)
    )


def _check_degree(degree: int) -> None:
    if not 1 <= degree <= DEGREES_PER_SCALE:
        raise ValueError(f"scale degree must be 1-7, got {degree}")


def build_triad(root: Note, offsets: tuple[int, ...], degree: int) -> Chord:
    _check_degree(degree)
    notes = _stack_thirds(root, offsets, degree, 3)
    chord_root, third, fifth = notes
    quality = classify_triad(
        interval_between(chord_root.pitch_class, third.pitch_class),
        interval_between(chord_root.pitch_class, fifth.pitch_class),
    )
    return Chord(degree=degree, quality=quality, notes=notes)


def build_seventh_chord(root: Note, offsets: tuple[int, ...], degree: int) -> Chord:
    _check_degree(degree)
    notes = _stack_thirds(root, offsets, degree, 4)
    chord_root, third, fifth, seventh = notes
    quality = classify_seventh(
        interval_between(chord_root.pitch_class, third.pitch_class),
        interval_between(chord_root.pitch_class, fifth.pitch_class),
        interval_between(chord_root.pitch_class, seventh.pitch_class),
    )
    return Chord(degree=degree, quality=quality, notes=notes)


def diatonic_chords(
    root: Note | None,
    offsets: tuple[int, ...],
    chord_type: ChordType = ChordType.TRIADS,
) -> list[Chord]:
    """One chord per scale degree 1..7, or an empty list when no root is selected."""
    if root is None:
        return []
    builder = build_seventh_chord if chord_type == ChordType.SEVENTHS else build_triad
    return [builder(root, offsets, degree) for degree in range(1, DEGREES_PER_SCALE + 1)]
