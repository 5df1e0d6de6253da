"""Top-level application: initializes pygame, wires the engine to audio and MIDI, runs the loop."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from scaleviz.config import FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from scaleviz.engine import ScaleEngine
from scaleviz.midi_input import KeyboardInput
from scaleviz.scales import ScaleSelection
from scaleviz.views.base import ViewContext, ViewManager
from scaleviz.views.chord_view import ChordView
from scaleviz.views.scale_view import ScaleView

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        soundfont: str | Path | None = None,
        midi_port: int | None = None,
        selection: ScaleSelection | None = None,
        audio_enabled: bool = True,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        # Optional subsystems degrade to None
        self._midi_input = self._try_midi(midi_port)
        self._audio = self._try_audio(soundfont)
        self._keyboard_input = KeyboardInput()

        self.engine = ScaleEngine(tone_output=self._audio, selection=selection)
        self.engine.audio_enabled = audio_enabled

        context = ViewContext(
            screen_size=(WINDOW_WIDTH, WINDOW_HEIGHT),
            engine=self.engine,
            midi_input=self._midi_input,
            audio=self._audio,
            keyboard_input=self._keyboard_input,
        )

        self.views = ViewManager(context)
        self.views.register(ScaleView)
        self.views.register(ChordView)
        self.views.push("scale")

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.WINDOWFOCUSLOST:
                    self._release_held_notes()
                else:
                    self._keyboard_input.feed_event(event)
                    if not self.views.handle_event(event):
                        running = False
            if running:
                if not self.views.update(dt):
                    running = False
                self.engine.update(dt)
                if self._audio:
                    self._audio.flush_pending_offs()
            self.views.draw(self.screen)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()

    def _release_held_notes(self) -> None:
        # key-ups that happen while unfocused never reach us
        self._keyboard_input.close()
        self.engine.release_all()
        if self._audio:
            self._audio.all_notes_off()

    def _cleanup(self) -> None:
        while self.views.active_view:
            self.views.pop()
        self.engine.close()
        self._keyboard_input.close()
        if self._midi_input:
            self._midi_input.close()
        if self._audio:
            self._audio.shutdown()

    @staticmethod
    def _try_midi(port_index: int | None):
        try:
            from scaleviz.midi_input import MidiInput
            mi = MidiInput(port_index)
            mi.open()
            return mi
        except Exception as exc:
            logger.warning("MIDI input unavailable: %s", exc)
            return None

    @staticmethod
    def _try_audio(soundfont: str | Path | None):
        try:
            from scaleviz.audio import AudioEngine
            return AudioEngine(soundfont)
        except Exception as exc:
            logger.warning("Audio unavailable: %s", exc)
            return None
