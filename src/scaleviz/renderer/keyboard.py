"""Render the two-octave piano keyboard and map clicks back to notes."""

from __future__ import annotations

import pygame

from scaleviz.config import KEYBOARD_FIRST_OCTAVE, KEYBOARD_OCTAVES
from scaleviz.pitch import NOTE_NAMES, Note
from scaleviz.renderer.colors import (
    BLACK_KEY,
    HELD_KEY,
    KEY_BORDER,
    KEY_LABEL,
    MODE_COLORS,
    WHITE_KEY,
)
from scaleviz.scales import Mode, ScaleSelection

# Which pitch classes are black keys
_BLACK_OFFSETS = {1, 3, 6, 8, 10}

BLACK_KEY_WIDTH_RATIO = 0.6
BLACK_KEY_HEIGHT_RATIO = 0.65


def is_black_key(pitch_class: int) -> bool:
    return pitch_class in _BLACK_OFFSETS


def keyboard_notes() -> list[Note]:
    return [
        Note(pc, octave)
        for octave in range(KEYBOARD_FIRST_OCTAVE, KEYBOARD_FIRST_OCTAVE + KEYBOARD_OCTAVES)
        for pc in range(12)
    ]


def key_rects(area: pygame.Rect) -> list[tuple[Note, pygame.Rect]]:
    """Layout every key inside *area*; black keys come last so they draw on top."""
    notes = keyboard_notes()
    white = [n for n in notes if not is_black_key(n.pitch_class)]
    white_w = area.w / len(white)
    black_w = white_w * BLACK_KEY_WIDTH_RATIO

    whites: list[tuple[Note, pygame.Rect]] = []
    blacks: list[tuple[Note, pygame.Rect]] = []
    white_idx = 0
    for note in notes:
        if is_black_key(note.pitch_class):
            # straddles the boundary after the previous white key
            bx = area.x + white_idx * white_w - black_w / 2
            blacks.append((note, pygame.Rect(
                int(bx), area.y, int(black_w), int(area.h * BLACK_KEY_HEIGHT_RATIO),
            )))
        else:
            wx = area.x + white_idx * white_w
            whites.append((note, pygame.Rect(int(wx), area.y, int(white_w) - 1, area.h)))
            white_idx += 1
    return whites + blacks


def key_at_position(area: pygame.Rect, pos: tuple[int, int]) -> Note | None:
    """Return the key under *pos*; black keys take priority over white keys."""
    for note, rect in reversed(key_rects(area)):
        if rect.collidepoint(pos):
            return note
    return None


def key_color(note: Note, selection: ScaleSelection, held: frozenset[Note] = frozenset()) -> tuple[int, int, int]:
    if note in held:
        return HELD_KEY
    membership = selection.membership(note.pitch_class)
    root_color, white_scale, black_scale = MODE_COLORS[selection.mode]
    black = is_black_key(note.pitch_class)
    if membership.is_root:
        return root_color
    if membership.is_in_scale:
        return black_scale if black else white_scale
    return BLACK_KEY if black else WHITE_KEY


def chord_key_color(note: Note, chord_tones: frozenset[int], mode: Mode) -> tuple[int, int, int]:
    """Color for the per-chord mini keyboard: every octave of a chord tone lights up."""
    _, white_tone, black_tone = MODE_COLORS[mode]
    black = is_black_key(note.pitch_class)
    if note.pitch_class in chord_tones:
        return black_tone if black else white_tone
    return BLACK_KEY if black else WHITE_KEY


def render_keyboard(
    surface: pygame.Surface,
    area: pygame.Rect,
    selection: ScaleSelection,
    held: frozenset[Note] = frozenset(),
    font: pygame.font.Font | None = None,
    chord_tones: frozenset[int] | None = None,
) -> None:
    """Draw the keyboard with the selected scale highlighted.

    With *chord_tones* only those pitch classes are highlighted, as in the
    chord table rows.
    """
    for note, rect in key_rects(area):
        if chord_tones is None:
            color = key_color(note, selection, held)
        else:
            color = chord_key_color(note, chord_tones, selection.mode)
        pygame.draw.rect(surface, color, rect)
        if not is_black_key(note.pitch_class):
            pygame.draw.rect(surface, KEY_BORDER, rect, 1)
        if font is not None:
            label = note.name if not is_black_key(note.pitch_class) else NOTE_NAMES[note.pitch_class]
            text = font.render(label, True, KEY_LABEL)
            surface.blit(text, (rect.centerx - text.get_width() // 2, rect.bottom - text.get_height() - 8))
