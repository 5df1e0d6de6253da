"""Tests for view navigation, view key bindings, and live input routing."""

import pygame

from scaleviz.chords import ChordType
from scaleviz.engine import ScaleEngine
from scaleviz.midi_input import LiveNoteEvent
from scaleviz.pitch import Note
from scaleviz.scales import Mode, Variation
from scaleviz.views.base import ViewAction, ViewContext, ViewManager, pump_live_input
from scaleviz.views.chord_view import ChordView
from scaleviz.views.scale_view import ScaleView


class FakeSource:
    def __init__(self, events):
        self._events = list(events)

    def poll(self):
        return self._events.pop(0) if self._events else None

    def close(self):
        self._events.clear()


class FakeAudio:
    def __init__(self):
        self.ons = []
        self.offs = []

    def note_on(self, note, velocity=None, channel=0):
        self.ons.append(note)

    def note_off(self, note, channel=0):
        self.offs.append(note)

    def all_notes_off(self):
        pass


class FakeTones:
    def __init__(self):
        self.played = []

    def play_tone(self, pitch_class, octave):
        self.played.append(Note(pitch_class, octave))


def _context(**kwargs):
    engine = ScaleEngine(tone_output=FakeTones())
    engine.set_scale_selection(Note(0, 3))
    return ViewContext(screen_size=(1280, 720), engine=engine, **kwargs)


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def _entered(view_cls, context):
    pygame.font.init()
    view = view_cls()
    view.on_enter(context)
    return view


def test_scale_view_tab_toggles_mode():
    ctx = _context()
    view = _entered(ScaleView, ctx)
    view.handle_event(_key(pygame.K_TAB))
    assert ctx.engine.selection.mode == Mode.MINOR
    view.handle_event(_key(pygame.K_TAB))
    assert ctx.engine.selection.mode == Mode.MAJOR


def test_scale_view_note_letters_are_not_controls():
    ctx = _context()
    view = _entered(ScaleView, ctx)
    for key in (pygame.K_m, pygame.K_v, pygame.K_s, pygame.K_t):
        assert view.handle_event(_key(key)) is None
    assert ctx.engine.selection.mode == Mode.MAJOR
    assert ctx.engine.selection.variation == Variation.IONIAN
    assert ctx.engine.audio_enabled


def test_scale_view_controls():
    ctx = _context()
    view = _entered(ScaleView, ctx)
    view.handle_event(_key(pygame.K_DOWN))
    assert ctx.engine.selection.variation == Variation.LYDIAN
    view.handle_event(_key(pygame.K_F1))
    assert not ctx.engine.audio_enabled
    assert view.handle_event(_key(pygame.K_RETURN)) == ViewAction(kind="push", target="chords")
    assert view.handle_event(_key(pygame.K_ESCAPE)) == ViewAction(kind="quit")


def test_chord_view_plays_and_toggles_sevenths():
    ctx = _context()
    view = _entered(ChordView, ctx)
    view.handle_event(_key(pygame.K_TAB))
    assert ctx.chord_type == ChordType.SEVENTHS
    view.handle_event(_key(pygame.K_F5))
    assert ctx.engine.tone_output.played == [Note(7, 3), Note(11, 3), Note(2, 4), Note(5, 4)]
    assert view.handle_event(_key(pygame.K_ESCAPE)) == ViewAction(kind="pop")


def test_view_manager_push_pop_quit():
    ctx = _context()
    pygame.font.init()
    manager = ViewManager(ctx)
    manager.register(ScaleView)
    manager.register(ChordView)
    manager.push("scale")
    assert manager.handle_event(_key(pygame.K_RETURN))
    assert isinstance(manager.active_view, ChordView)
    assert manager.handle_event(_key(pygame.K_ESCAPE))
    assert isinstance(manager.active_view, ScaleView)
    assert not manager.handle_event(_key(pygame.K_ESCAPE))


def test_pump_routes_note_on_and_off_to_engine_and_audio():
    midi = FakeSource([
        LiveNoteEvent(pitch=60, velocity=90, timestamp=0.0, is_note_on=True),
        LiveNoteEvent(pitch=64, velocity=90, timestamp=0.0, is_note_on=True),
    ])
    keys = FakeSource([
        LiveNoteEvent(pitch=67, velocity=80, timestamp=0.0, is_note_on=True),
        LiveNoteEvent(pitch=64, velocity=0, timestamp=0.0, is_note_on=False),
    ])
    audio = FakeAudio()
    ctx = _context(midi_input=midi, keyboard_input=keys, audio=audio)

    pump_live_input(ctx)

    assert ctx.engine.held_notes == frozenset({Note(0, 4), Note(7, 4)})
    assert audio.ons == [Note(0, 4), Note(4, 4), Note(7, 4)]
    assert audio.offs == [Note(4, 4)]
    # C was the first scale step; E (expected D) and then G restarted practice
    assert ctx.engine.practice_stats.expected_step_index == 0
    assert midi.poll() is None and keys.poll() is None


def test_pump_respects_mute():
    audio = FakeAudio()
    ctx = _context(
        midi_input=FakeSource([LiveNoteEvent(pitch=60, velocity=90, timestamp=0.0, is_note_on=True)]),
        audio=audio,
    )
    ctx.engine.audio_enabled = False
    pump_live_input(ctx)
    assert audio.ons == []
    assert ctx.engine.held_pitch_classes == frozenset({0})
