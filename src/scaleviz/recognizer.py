"""Chord recognition — match held pitch classes against the diatonic chords."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from scaleviz.chords import Chord


def chord_pitch_classes(chord: Chord) -> frozenset[int]:
    """Pitch classes of a chord; octave doublings collapse to one member."""
    return chord.pitch_classes


def recognize(held_pitch_classes: Iterable[int], chords: Sequence[Chord]) -> int | None:
    """Return the degree of the first chord whose pitch-class set equals the held set.

    Matching ignores octave and voicing. Chords are scanned in order, so the
    lowest degree wins a tie.
    """
    held = frozenset(held_pitch_classes)
    if not held:
        return None
    for chord in chords:
        if chord_pitch_classes(chord) == held:
            return chord.degree
    return None
