"""Scale catalog and resolver: (mode, variation) -> semitone offsets from a root."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from scaleviz.pitch import NOTE_NAMES, Note, interval_between, transpose, validate_pitch_class


class Mode(Enum):
    MAJOR = auto()
    MINOR = auto()


class Variation(Enum):
    IONIAN = auto()
    LYDIAN = auto()
    MIXOLYDIAN = auto()
    NATURAL = auto()
    HARMONIC = auto()
    MELODIC = auto()


class InvalidVariation(ValueError):
    """Raised when a variation is requested for a mode it does not belong to."""


# Each row: 7 ascending offsets starting at 0, all below 12
SCALE_CATALOG: dict[Mode, dict[Variation, tuple[int, ...]]] = {
    Mode.MAJOR: {
        Variation.IONIAN: (0, 2, 4, 5, 7, 9, 11),
        Variation.LYDIAN: (0, 2, 4, 6, 7, 9, 11),
        Variation.MIXOLYDIAN: (0, 2, 4, 5, 7, 9, 10),
    },
    Mode.MINOR: {
        Variation.NATURAL: (0, 2, 3, 5, 7, 8, 10),
        Variation.HARMONIC: (0, 2, 3, 5, 7, 8, 11),
        Variation.MELODIC: (0, 2, 3, 5, 7, 9, 11),
    },
}


def variations_for(mode: Mode) -> list[Variation]:
    return list(SCALE_CATALOG[mode])


def default_variation(mode: Mode) -> Variation:
    return variations_for(mode)[0]


def resolve_scale(mode: Mode, variation: Variation) -> tuple[int, ...]:
    """Look up the 7 semitone offsets for *variation* of *mode*."""
    try:
        return SCALE_CATALOG[mode][variation]
    except KeyError:
        raise InvalidVariation(
            f"{variation.name.lower()} is not a variation of {mode.name.lower()}"
        ) from None


def is_in_scale(root: int, mode: Mode, variation: Variation, candidate: int) -> bool:
    validate_pitch_class(root)
    validate_pitch_class(candidate)
    return interval_between(root, candidate) in resolve_scale(mode, variation)


def scale_pitch_classes(root: int, offsets: tuple[int, ...]) -> list[int]:
    return [transpose(root, offset) for offset in offsets]


def scale_notes(root: Note, offsets: tuple[int, ...]) -> list[Note]:
    """The scale ascending from *root*, closed by the root an octave up."""
    notes = [root.transposed(offset) for offset in offsets]
    notes.append(root.transposed(12))
    return notes


@dataclass(frozen=True)
class ScaleMembership:
    is_in_scale: bool = False
    is_root: bool = False


@dataclass(frozen=True)
class ScaleSelection:
    """The active root/mode/variation. ``root`` is None when nothing is selected."""

    root: Note | None = None
    mode: Mode = Mode.MAJOR
    variation: Variation = Variation.IONIAN

    def __post_init__(self) -> None:
        resolve_scale(self.mode, self.variation)

    @property
    def is_active(self) -> bool:
        return self.root is not None

    @property
    def offsets(self) -> tuple[int, ...]:
        return resolve_scale(self.mode, self.variation)

    def with_mode(self, mode: Mode) -> ScaleSelection:
        if mode == self.mode:
            return self
        return replace(self, mode=mode, variation=default_variation(mode))

    def with_variation(self, variation: Variation) -> ScaleSelection:
        return replace(self, variation=variation)

    def membership(self, pitch_class: int) -> ScaleMembership:
        validate_pitch_class(pitch_class)
        if self.root is None:
            return ScaleMembership()
        return ScaleMembership(
            is_in_scale=is_in_scale(self.root.pitch_class, self.mode, self.variation, pitch_class),
            is_root=pitch_class == self.root.pitch_class,
        )


def scale_name(selection: ScaleSelection) -> str:
    if selection.root is None:
        return "Select a key"
    return (
        f"{NOTE_NAMES[selection.root.pitch_class]} {selection.mode.name.capitalize()}"
        f" ({selection.variation.name.capitalize()})"
    )
