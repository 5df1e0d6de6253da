"""Heads-up display — scale name, held notes, recognized chord, practice counters."""

from __future__ import annotations

import pygame

from scaleviz.engine import ScaleEngine
from scaleviz.pitch import NOTE_NAMES
from scaleviz.renderer.colors import HUD_DIM, HUD_TEXT, MODE_COLORS


def hud_lines(engine: ScaleEngine) -> list[str]:
    stats = engine.practice_stats
    held = sorted(engine.held_notes, key=lambda n: n.absolute_semitone)
    chord = engine.recognized_chord
    lines = [
        f"Scale: {engine.scale_name}",
        f"Held: {', '.join(n.name for n in held) or '-'}",
        f"Chord: {f'{chord.roman_numeral}  {chord.name}' if chord else '-'}",
    ]
    if stats.expected_pitch_class is not None:
        lines.append(
            f"Practice: step {stats.expected_step_index + 1}/7"
            f" (next {NOTE_NAMES[stats.expected_pitch_class]})"
            f"  completed {stats.completed_count}  best {stats.best_completed_count}"
        )
    return lines


def render_hud(surface: pygame.Surface, engine: ScaleEngine) -> None:
    font = pygame.font.SysFont("monospace", 20)
    accent = MODE_COLORS[engine.selection.mode][0] if engine.selection.is_active else HUD_DIM

    y = 10
    for i, line in enumerate(hud_lines(engine)):
        text = font.render(line, True, accent if i == 0 else HUD_TEXT)
        surface.blit(text, (10, y))
        y += 28
