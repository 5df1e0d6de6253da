"""ScaleEngine — the music-theory core as seen by the UI, audio, and MIDI layers."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum, auto
from typing import Protocol, runtime_checkable

from scaleviz.chords import DEGREES_PER_SCALE, Chord, ChordType, diatonic_chords
from scaleviz.config import CHORD_DEBOUNCE_MS, PRACTICE_TIMEOUT_MS, SCALE_STEP_S
from scaleviz.pitch import Note, validate_pitch_class
from scaleviz.practice import PracticeStats, ScalePracticeSession
from scaleviz.recognizer import recognize
from scaleviz.scales import (
    Mode,
    ScaleMembership,
    ScaleSelection,
    Variation,
    scale_name,
    scale_notes,
    variations_for,
)
from scaleviz.scheduler import Timer

logger = logging.getLogger(__name__)

# Fewer distinct pitch classes than a triad is never recognized
MIN_CHORD_SIZE = 3


class NoteEventType(Enum):
    ON = auto()
    OFF = auto()


@runtime_checkable
class ToneOutput(Protocol):
    """Anything that can sound a single note."""
    def play_tone(self, pitch_class: int, octave: int) -> None: ...


class ScaleEngine:
    """Owns the active selection, held notes, chord recognition, and scale practice.

    Every method runs synchronously; the two delayed actions (chord
    recognition debounce and the practice idle timeout) are :class:`Timer`
    instances advanced by :meth:`update`.
    """

    def __init__(
        self,
        tone_output: ToneOutput | None = None,
        debounce_ms: float = CHORD_DEBOUNCE_MS,
        practice_timeout_ms: float = PRACTICE_TIMEOUT_MS,
        selection: ScaleSelection | None = None,
    ) -> None:
        self.tone_output = tone_output
        self.audio_enabled = True
        self._selection = selection or ScaleSelection()
        self._debounce_ms = debounce_ms
        self._debounce = Timer("chord-debounce")
        self._melody = Timer("scale-playback")
        self._melody_queue: list[Note] = []
        self._step_ms = SCALE_STEP_S * 1000.0
        self._held: set[Note] = set()
        self._recognized: Chord | None = None
        self._practice = ScalePracticeSession(Timer("practice-idle"), practice_timeout_ms)
        self._practice.set_scale(self._selection.root, self._selection.offsets)

    # -- selection ---------------------------------------------------------

    @property
    def selection(self) -> ScaleSelection:
        return self._selection

    @property
    def scale_name(self) -> str:
        return scale_name(self._selection)

    def set_scale_selection(
        self,
        root: Note | None,
        mode: Mode | None = None,
        variation: Variation | None = None,
    ) -> None:
        """Replace the active selection. A different root or scale resets scale practice."""
        mode = mode or self._selection.mode
        if variation is None:
            variation = self._selection.with_mode(mode).variation
        self._apply_selection(ScaleSelection(root=root, mode=mode, variation=variation))

    def set_mode(self, mode: Mode) -> None:
        self._apply_selection(self._selection.with_mode(mode))

    def set_variation(self, variation: Variation) -> None:
        self._apply_selection(self._selection.with_variation(variation))

    def cycle_variation(self) -> Variation:
        options = variations_for(self._selection.mode)
        idx = options.index(self._selection.variation)
        variation = options[(idx + 1) % len(options)]
        self.set_variation(variation)
        return variation

    def _apply_selection(self, selection: ScaleSelection) -> None:
        self._selection = selection
        self._practice.set_scale(selection.root, selection.offsets)
        self._schedule_recognition()
        logger.debug("Selection: %s", scale_name(selection))

    # -- queries -----------------------------------------------------------

    def get_scale_membership(self, pitch_class: int) -> ScaleMembership:
        return self._selection.membership(pitch_class)

    def get_diatonic_chords(self, chord_type: ChordType = ChordType.TRIADS) -> list[Chord]:
        return diatonic_chords(self._selection.root, self._selection.offsets, chord_type)

    @property
    def held_notes(self) -> frozenset[Note]:
        return frozenset(self._held)

    @property
    def held_pitch_classes(self) -> frozenset[int]:
        return frozenset(n.pitch_class for n in self._held)

    @property
    def recognized_chord(self) -> Chord | None:
        return self._recognized

    @property
    def recognized_degree(self) -> int | None:
        return self._recognized.degree if self._recognized else None

    @property
    def practice_stats(self) -> PracticeStats:
        return self._practice.stats

    # -- input -------------------------------------------------------------

    def on_note_event(self, pitch_class: int, octave: int, event_type: NoteEventType) -> None:
        """Handle a live note-on/off (from MIDI or the computer keyboard)."""
        validate_pitch_class(pitch_class)
        if not isinstance(event_type, NoteEventType):
            raise ValueError(f"unknown note event type: {event_type!r}")
        note = Note(pitch_class, octave)
        before = self.held_pitch_classes

        if event_type == NoteEventType.ON:
            self._held.add(note)
            self._practice.feed(pitch_class)
        else:
            self._held.discard(note)

        if self.held_pitch_classes != before:
            self._schedule_recognition()

    def on_manual_key_press(self, pitch_class: int, octave: int) -> None:
        """A click on the on-screen keyboard: sound it and toggle it as the root."""
        validate_pitch_class(pitch_class)
        self._play(Note(pitch_class, octave))
        root = self._selection.root
        if root is not None and root.pitch_class == pitch_class:
            self.set_scale_selection(None)
        else:
            self.set_scale_selection(Note(pitch_class, octave))

    # -- recognition -------------------------------------------------------

    def _schedule_recognition(self) -> None:
        self._debounce.arm(self._debounce_ms, self._recognize_held)

    def _recognize_held(self) -> None:
        held = self.held_pitch_classes
        self._recognized = None
        if len(held) < MIN_CHORD_SIZE:
            return
        # a 3-note set can only equal a triad and a 4-note set only a seventh
        for chord_type in (ChordType.TRIADS, ChordType.SEVENTHS):
            chords = self.get_diatonic_chords(chord_type)
            degree = recognize(held, chords)
            if degree is not None:
                self._recognized = chords[degree - 1]
                logger.debug("Recognized %s", self._recognized.name)
                return

    # -- playback ----------------------------------------------------------

    def _play(self, note: Note) -> None:
        if self.audio_enabled and self.tone_output is not None:
            self.tone_output.play_tone(note.pitch_class, note.octave)

    def play_notes(self, notes: Sequence[Note]) -> None:
        for note in notes:
            self._play(note)

    def play_chord(self, degree: int, chord_type: ChordType = ChordType.TRIADS) -> Chord | None:
        if not 1 <= degree <= DEGREES_PER_SCALE:
            raise ValueError(f"scale degree must be 1-7, got {degree}")
        chords = self.get_diatonic_chords(chord_type)
        if not chords:
            return None
        chord = chords[degree - 1]
        self.play_notes(chord.notes)
        return chord

    def play_scale(self, step_s: float = SCALE_STEP_S) -> list[Note]:
        """Play the scale ascending, closing on the root an octave up."""
        root = self._selection.root
        if root is None:
            return []
        notes = scale_notes(root, self._selection.offsets)
        self._melody_queue = list(notes)
        self._step_ms = step_s * 1000.0
        self._play_next_melody_note()
        return notes

    def _play_next_melody_note(self) -> None:
        if not self._melody_queue:
            return
        self._play(self._melody_queue.pop(0))
        if self._melody_queue:
            self._melody.arm(self._step_ms, self._play_next_melody_note)

    # -- lifecycle ---------------------------------------------------------

    def update(self, dt: float) -> None:
        """Advance all timers by *dt* seconds (call once per frame)."""
        self._debounce.update(dt)
        self._practice.timer.update(dt)
        self._melody.update(dt)

    def release_all(self) -> None:
        if self._held:
            self._held.clear()
            self._schedule_recognition()

    def close(self) -> None:
        self._debounce.cancel()
        self._melody.cancel()
        self._melody_queue.clear()
        self._practice.close()
