"""View protocol, ViewContext, ViewAction, and ViewManager."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

import pygame

from scaleviz.chords import ChordType
from scaleviz.engine import NoteEventType, ScaleEngine

if TYPE_CHECKING:
    from scaleviz.audio import AudioEngine
    from scaleviz.midi_input import KeyboardInput, MidiInput


@dataclass
class ViewContext:
    """Shared state passed to views on entry."""

    screen_size: tuple[int, int]
    engine: ScaleEngine
    midi_input: MidiInput | None = None
    audio: AudioEngine | None = None
    keyboard_input: KeyboardInput | None = None
    chord_type: ChordType = ChordType.TRIADS


@dataclass
class ViewAction:
    """Navigation command returned by views."""

    kind: Literal["push", "pop", "quit"]
    target: str | None = None


@runtime_checkable
class View(Protocol):
    """A full-screen state."""

    name: str
    display_name: str

    def on_enter(self, context: ViewContext) -> None: ...
    def on_exit(self) -> None: ...
    def handle_event(self, event: pygame.event.Event) -> ViewAction | None: ...
    def update(self, dt: float) -> ViewAction | None: ...
    def draw(self, surface: pygame.Surface) -> None: ...


def pump_live_input(context: ViewContext) -> None:
    """Drain MIDI and computer-keyboard sources into the engine, sounding each note."""
    for source in (context.midi_input, context.keyboard_input):
        if source is None:
            continue
        while True:
            evt = source.poll()
            if evt is None:
                break
            note = evt.note
            if evt.is_note_on:
                context.engine.on_note_event(note.pitch_class, note.octave, NoteEventType.ON)
                if context.audio and context.engine.audio_enabled:
                    context.audio.note_on(note, evt.velocity)
            else:
                context.engine.on_note_event(note.pitch_class, note.octave, NoteEventType.OFF)
                if context.audio:
                    context.audio.note_off(note)


class ViewManager:
    """Owns the view stack and dispatches the game loop to the active view."""

    def __init__(self, context: ViewContext) -> None:
        self._registry: dict[str, type] = {}
        self._stack: list[View] = []
        self._context = context

    def register(self, view_cls: type) -> None:
        instance = view_cls()
        self._registry[instance.name] = view_cls

    def push(self, view_name: str) -> None:
        if self._stack:
            self._stack[-1].on_exit()
        view = self._registry[view_name]()
        view.on_enter(self._context)
        self._stack.append(view)

    def pop(self) -> None:
        if self._stack:
            self._stack.pop().on_exit()
        if self._stack:
            self._stack[-1].on_enter(self._context)

    @property
    def active_view(self) -> View | None:
        return self._stack[-1] if self._stack else None

    def handle_event(self, event: pygame.event.Event) -> bool:
        if (view := self.active_view) is None:
            return False
        action = view.handle_event(event)
        return self._process_action(action)

    def update(self, dt: float) -> bool:
        if (view := self.active_view) is None:
            return False
        action = view.update(dt)
        return self._process_action(action)

    def draw(self, surface: pygame.Surface) -> None:
        if (view := self.active_view) is not None:
            view.draw(surface)

    def _process_action(self, action: ViewAction | None) -> bool:
        if action is None:
            return True
        if action.kind == "quit":
            return False
        elif action.kind == "push":
            self.push(action.target)
        elif action.kind == "pop":
            self.pop()
        return True


def layout_regions(
    total: pygame.Rect,
    specs: list[tuple[str, Literal["top", "bottom"], int]],
) -> dict[str, pygame.Rect]:
    """Carve out named regions from a total rect. Remainder is 'center'."""
    remaining = total.copy()
    regions: dict[str, pygame.Rect] = {}

    for name, anchor, size in specs:
        if anchor == "top":
            regions[name] = pygame.Rect(remaining.x, remaining.y, remaining.w, size)
            remaining = pygame.Rect(remaining.x, remaining.y + size, remaining.w, remaining.h - size)
        elif anchor == "bottom":
            regions[name] = pygame.Rect(remaining.x, remaining.bottom - size, remaining.w, size)
            remaining = pygame.Rect(remaining.x, remaining.y, remaining.w, remaining.h - size)

    regions["center"] = remaining
    return regions
