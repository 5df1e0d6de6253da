"""Main view: the keyboard with the selected scale highlighted."""

from __future__ import annotations

import pygame

from scaleviz.renderer import colors as colors_mod
from scaleviz.renderer.hud import render_hud
from scaleviz.renderer.keyboard import key_at_position, render_keyboard
from scaleviz.scales import Mode
from scaleviz.views.base import ViewAction, ViewContext, layout_regions, pump_live_input

KEYBOARD_HEIGHT = 260
KEYBOARD_MARGIN = 60


class ScaleView:
    name = "scale"
    display_name = "Scale Visualizer"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._font: pygame.font.Font | None = None
        self._key_font: pygame.font.Font | None = None
        self._keyboard_area = pygame.Rect(0, 0, 0, 0)

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 18)
        self._key_font = pygame.font.SysFont("monospace", 14)
        w, h = context.screen_size
        regions = layout_regions(
            pygame.Rect(KEYBOARD_MARGIN, 0, w - 2 * KEYBOARD_MARGIN, h),
            [("hud", "top", 150), ("hint", "bottom", 50), ("keyboard", "bottom", KEYBOARD_HEIGHT)],
        )
        self._keyboard_area = regions["keyboard"]

    def on_exit(self) -> None:
        if self._context and self._context.audio:
            self._context.audio.all_notes_off()

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if self._context is None:
            return None
        engine = self._context.engine

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            note = key_at_position(self._keyboard_area, event.pos)
            if note is not None:
                engine.on_manual_key_press(note.pitch_class, note.octave)
            return None

        if event.type != pygame.KEYDOWN:
            return None

        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="quit")
        elif event.key == pygame.K_TAB:
            mode = Mode.MINOR if engine.selection.mode == Mode.MAJOR else Mode.MAJOR
            engine.set_mode(mode)
        elif event.key in (pygame.K_UP, pygame.K_DOWN):
            engine.cycle_variation()
        elif event.key == pygame.K_SPACE:
            engine.play_scale()
        elif event.key == pygame.K_F1:
            engine.audio_enabled = not engine.audio_enabled
        elif event.key == pygame.K_RETURN:
            return ViewAction(kind="push", target="chords")

        return None

    def update(self, dt: float) -> ViewAction | None:
        if self._context:
            pump_live_input(self._context)
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if self._context is None:
            return
        engine = self._context.engine
        surface.fill(colors_mod.BG)
        w, h = surface.get_size()

        render_hud(surface, engine)
        render_keyboard(surface, self._keyboard_area, engine.selection, engine.held_notes, self._key_font)

        if self._font:
            sound = "on" if engine.audio_enabled else "off"
            variation = engine.selection.variation.name.capitalize()
            status = self._font.render(
                f"{engine.selection.mode.name.capitalize()} / {variation} | sound {sound}",
                True, colors_mod.HUD_TEXT,
            )
            surface.blit(status, (w - status.get_width() - 10, 10))

            hint = self._font.render(
                "Click: root | Tab: major/minor | Up/Down: variation | Space: play scale"
                " | Enter: chords | F1: sound | Esc: quit",
                True, colors_mod.HUD_DIM,
            )
            surface.blit(hint, (10, h - 30))
