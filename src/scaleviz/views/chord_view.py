"""Table of the seven diatonic chords of the selected scale."""

from __future__ import annotations

import pygame

from scaleviz.chords import Chord, ChordType
from scaleviz.renderer import colors as colors_mod
from scaleviz.renderer.keyboard import render_keyboard
from scaleviz.views.base import ViewAction, ViewContext, pump_live_input

ROW_HEIGHT = 48
TABLE_TOP = 120

_DEGREE_KEYS = {
    pygame.K_F1: 1, pygame.K_F2: 2, pygame.K_F3: 3, pygame.K_F4: 4,
    pygame.K_F5: 5, pygame.K_F6: 6, pygame.K_F7: 7,
}


class ChordView:
    name = "chords"
    display_name = "Diatonic Chords"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._chord_type = ChordType.TRIADS
        self._font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._chord_type = context.chord_type
        self._font = pygame.font.SysFont("monospace", 20)
        self._title_font = pygame.font.SysFont("monospace", 32)

    def on_exit(self) -> None:
        if self._context and self._context.audio:
            self._context.audio.all_notes_off()

    def _chords(self) -> list[Chord]:
        if self._context is None:
            return []
        return self._context.engine.get_diatonic_chords(self._chord_type)

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if self._context is None:
            return None
        engine = self._context.engine

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            row = (event.pos[1] - TABLE_TOP) // ROW_HEIGHT
            if 0 <= row < len(self._chords()):
                engine.play_chord(row + 1, self._chord_type)
            return None

        if event.type != pygame.KEYDOWN:
            return None

        if event.key in (pygame.K_ESCAPE, pygame.K_RETURN):
            return ViewAction(kind="pop")
        elif event.key == pygame.K_TAB:
            self._chord_type = (
                ChordType.SEVENTHS if self._chord_type == ChordType.TRIADS else ChordType.TRIADS
            )
            self._context.chord_type = self._chord_type
        elif event.key in _DEGREE_KEYS:
            engine.play_chord(_DEGREE_KEYS[event.key], self._chord_type)

        return None

    def update(self, dt: float) -> ViewAction | None:
        if self._context:
            pump_live_input(self._context)
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if self._context is None or not self._font or not self._title_font:
            return
        engine = self._context.engine
        surface.fill(colors_mod.BG)
        w, h = surface.get_size()

        kind = "Seventh Chords" if self._chord_type == ChordType.SEVENTHS else "Triads"
        title = self._title_font.render(f"{engine.scale_name}: {kind}", True, colors_mod.HUD_TEXT)
        surface.blit(title, (w // 2 - title.get_width() // 2, 40))

        chords = self._chords()
        if not chords:
            empty = self._font.render(
                "Select a root note on the piano to see the diatonic chords.", True, colors_mod.HUD_DIM,
            )
            surface.blit(empty, (w // 2 - empty.get_width() // 2, TABLE_TOP + 20))

        recognized = engine.recognized_chord
        accent = colors_mod.MODE_COLORS[engine.selection.mode][0]
        y = TABLE_TOP
        for chord in chords:
            highlighted = recognized is not None and recognized.notes == chord.notes
            if highlighted:
                pygame.draw.rect(surface, accent, pygame.Rect(40, y, w - 80, ROW_HEIGHT - 4))
            cells = [
                f"{chord.degree}",
                chord.roman_numeral,
                chord.name,
                ", ".join(n.name for n in chord.notes),
            ]
            x = 60
            for cell, width in zip(cells, (60, 110, 300, 300)):
                text = self._font.render(cell, True, colors_mod.HUD_TEXT)
                surface.blit(text, (x, y + (ROW_HEIGHT - text.get_height()) // 2))
                x += width
            render_keyboard(
                surface,
                pygame.Rect(x, y + 2, w - x - 60, ROW_HEIGHT - 8),
                engine.selection,
                chord_tones=chord.pitch_classes,
            )
            y += ROW_HEIGHT

        hint = self._font.render(
            "Tab: triads/sevenths | F1-F7 or click: play chord | Esc: back", True, colors_mod.HUD_DIM,
        )
        surface.blit(hint, (40, h - 40))
