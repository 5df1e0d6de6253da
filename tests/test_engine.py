"""Tests for the ScaleEngine facade: selection, input, recognition, playback."""

import pytest

from scaleviz.chords import ChordQuality, ChordType
from scaleviz.engine import NoteEventType, ScaleEngine, ToneOutput
from scaleviz.pitch import InvalidPitchClass, Note
from scaleviz.scales import InvalidVariation, Mode, Variation

ON = NoteEventType.ON
OFF = NoteEventType.OFF


class FakeTones:
    def __init__(self):
        self.played = []

    def play_tone(self, pitch_class, octave):
        self.played.append(Note(pitch_class, octave))


def _engine(**kwargs):
    tones = FakeTones()
    return ScaleEngine(tone_output=tones, **kwargs), tones


def test_fake_tones_is_tone_output():
    assert isinstance(FakeTones(), ToneOutput)


def test_no_selection_means_no_scale_and_no_chords():
    engine, _ = _engine()
    assert engine.get_diatonic_chords() == []
    assert engine.get_diatonic_chords(ChordType.SEVENTHS) == []
    assert not engine.get_scale_membership(0).is_in_scale
    assert engine.scale_name == "Select a key"


def test_set_scale_selection_and_membership():
    engine, _ = _engine()
    engine.set_scale_selection(Note(9, 3), Mode.MINOR, Variation.NATURAL)
    assert engine.get_scale_membership(9).is_root
    assert engine.get_scale_membership(0).is_in_scale
    assert not engine.get_scale_membership(1).is_in_scale
    assert [c.quality for c in engine.get_diatonic_chords()][:2] == [
        ChordQuality.MINOR, ChordQuality.DIMINISHED,
    ]


def test_invalid_variation_for_mode():
    engine, _ = _engine()
    with pytest.raises(InvalidVariation):
        engine.set_scale_selection(Note(0, 3), Mode.MAJOR, Variation.MELODIC)


def test_mode_switch_picks_default_variation():
    engine, _ = _engine()
    engine.set_scale_selection(Note(0, 3), Mode.MAJOR, Variation.LYDIAN)
    engine.set_mode(Mode.MINOR)
    assert engine.selection.variation == Variation.NATURAL
    assert engine.selection.root == Note(0, 3)


def test_cycle_variation_wraps():
    engine, _ = _engine()
    assert engine.cycle_variation() == Variation.LYDIAN
    assert engine.cycle_variation() == Variation.MIXOLYDIAN
    assert engine.cycle_variation() == Variation.IONIAN


def test_manual_key_press_toggles_root_and_plays():
    engine, tones = _engine()
    engine.on_manual_key_press(4, 3)
    assert engine.selection.root == Note(4, 3)
    assert tones.played == [Note(4, 3)]
    engine.on_manual_key_press(4, 4)
    assert engine.selection.root is None
    engine.on_manual_key_press(4, 3)
    engine.on_manual_key_press(7, 3)
    assert engine.selection.root == Note(7, 3)
    assert len(tones.played) == 4


def test_muted_engine_plays_nothing():
    engine, tones = _engine()
    engine.audio_enabled = False
    engine.on_manual_key_press(0, 3)
    assert tones.played == []
    assert engine.selection.root == Note(0, 3)


def test_chord_recognized_after_debounce():
    engine, _ = _engine(debounce_ms=100)
    engine.set_scale_selection(Note(0, 3), Mode.MAJOR, Variation.IONIAN)
    for pc in (0, 4, 7):
        engine.on_note_event(pc, 4, ON)
    assert engine.recognized_degree is None
    engine.update(0.05)
    assert engine.recognized_degree is None
    engine.update(0.06)
    assert engine.recognized_degree == 1
    assert engine.recognized_chord.name == "C Major"


def test_each_change_restarts_debounce():
    engine, _ = _engine(debounce_ms=100)
    engine.set_scale_selection(Note(0, 3))
    engine.on_note_event(2, 4, ON)
    engine.update(0.08)
    engine.on_note_event(5, 4, ON)
    engine.update(0.08)
    engine.on_note_event(9, 4, ON)
    engine.update(0.08)
    assert engine.recognized_degree is None
    engine.update(0.03)
    assert engine.recognized_degree == 2


def test_seventh_chord_recognized():
    engine, _ = _engine()
    engine.set_scale_selection(Note(0, 3))
    for pc in (7, 11, 2, 5):
        engine.on_note_event(pc, 3, ON)
    engine.update(0.2)
    assert engine.recognized_chord.quality == ChordQuality.DOMINANT7


def test_release_clears_recognition():
    engine, _ = _engine()
    engine.set_scale_selection(Note(0, 3))
    for pc in (0, 4, 7):
        engine.on_note_event(pc, 4, ON)
    engine.update(0.2)
    engine.on_note_event(7, 4, OFF)
    engine.update(0.2)
    assert engine.recognized_degree is None


def test_octave_doubling_still_recognized():
    engine, _ = _engine()
    engine.set_scale_selection(Note(0, 3))
    for pc, octave in ((0, 3), (4, 3), (7, 3), (0, 4)):
        engine.on_note_event(pc, octave, ON)
    engine.update(0.2)
    assert engine.recognized_degree == 1
    engine.on_note_event(0, 4, OFF)
    assert engine.held_pitch_classes == frozenset({0, 4, 7})


def test_two_notes_never_recognized():
    engine, _ = _engine()
    engine.set_scale_selection(Note(0, 3))
    engine.on_note_event(0, 4, ON)
    engine.on_note_event(4, 4, ON)
    engine.update(0.2)
    assert engine.recognized_chord is None


def test_note_events_drive_practice():
    engine, _ = _engine()
    engine.set_scale_selection(Note(0, 3))
    for pc in (0, 2, 4, 5, 7, 9, 11):
        engine.on_note_event(pc, 4, ON)
        engine.on_note_event(pc, 4, OFF)
    stats = engine.practice_stats
    assert stats.completed_count == 1
    assert stats.expected_step_index == 0


def test_practice_idle_timeout_through_update():
    engine, _ = _engine(practice_timeout_ms=2000)
    engine.set_scale_selection(Note(0, 3))
    for pc in (0, 2, 4):
        engine.on_note_event(pc, 4, ON)
    engine.update(2.1)
    assert engine.practice_stats.expected_step_index == 0


def test_root_change_resets_practice():
    engine, _ = _engine()
    engine.set_scale_selection(Note(0, 3))
    for pc in (0, 2, 4, 5, 7, 9, 11) * 2:
        engine.on_note_event(pc, 4, ON)
    engine.set_scale_selection(Note(7, 3))
    stats = engine.practice_stats
    assert stats.best_completed_count == 2
    assert stats.completed_count == 0


def test_malformed_events_rejected_without_state_change():
    engine, _ = _engine()
    engine.set_scale_selection(Note(0, 3))
    with pytest.raises(InvalidPitchClass):
        engine.on_note_event(12, 4, ON)
    with pytest.raises(ValueError):
        engine.on_note_event(0, 4, "on")
    assert engine.held_pitch_classes == frozenset()
    assert engine.practice_stats.expected_step_index == 0


def test_play_chord():
    engine, tones = _engine()
    assert engine.play_chord(1) is None
    engine.set_scale_selection(Note(0, 3))
    chord = engine.play_chord(5, ChordType.SEVENTHS)
    assert chord.name == "G Dominant7"
    assert tones.played == list(chord.notes)


def test_play_scale_steps_through_update():
    engine, tones = _engine()
    engine.set_scale_selection(Note(0, 3))
    notes = engine.play_scale(step_s=0.25)
    assert len(notes) == 8
    assert tones.played == [Note(0, 3)]
    for _ in range(7):
        engine.update(0.26)
    assert tones.played == notes
    assert tones.played[-1] == Note(0, 4)


def test_close_cancels_timers():
    engine, tones = _engine()
    engine.set_scale_selection(Note(0, 3))
    engine.on_note_event(0, 4, ON)
    engine.play_scale()
    engine.close()
    engine.update(5.0)
    assert tones.played == [Note(0, 3)]
    assert engine.practice_stats.expected_step_index == 1


def test_play_chord_rejects_out_of_range_degree():
    engine, tones = _engine()
    engine.set_scale_selection(Note(0, 3))
    for degree in (0, -1, 8):
        with pytest.raises(ValueError):
            engine.play_chord(degree)
    assert tones.played == []


def test_release_all_clears_held_notes_and_recognition():
    engine, _ = _engine()
    engine.set_scale_selection(Note(0, 3))
    for pc in (0, 4, 7):
        engine.on_note_event(pc, 4, ON)
    engine.update(0.2)
    assert engine.recognized_degree == 1
    engine.release_all()
    assert engine.held_pitch_classes == frozenset()
    engine.update(0.2)
    assert engine.recognized_chord is None
