"""Live note input from MIDI keyboards and the computer keyboard."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import mido
import pygame
import rtmidi

from scaleviz.pitch import Note

logger = logging.getLogger(__name__)


@dataclass
class LiveNoteEvent:
    pitch: int  # MIDI note number 0-127
    velocity: int
    timestamp: float
    is_note_on: bool

    @property
    def note(self) -> Note:
        return Note.from_midi(self.pitch)

    @property
    def pitch_class(self) -> int:
        return self.pitch % 12


class MidiDeviceError(Exception):
    """Raised when no MIDI device is found or connection fails."""


@runtime_checkable
class InputSource(Protocol):
    """Common interface for MIDI and keyboard input sources."""
    def poll(self) -> LiveNoteEvent | None: ...
    def close(self) -> None: ...


# Computer keyboard -> MIDI pitch, two rows per octave (C3 and C4)
_LOWER_OCTAVE = {
    pygame.K_z: 48, pygame.K_s: 49, pygame.K_x: 50, pygame.K_d: 51,
    pygame.K_c: 52, pygame.K_v: 53, pygame.K_g: 54, pygame.K_b: 55,
    pygame.K_h: 56, pygame.K_n: 57, pygame.K_j: 58, pygame.K_m: 59,
}
_UPPER_OCTAVE = {
    pygame.K_q: 60, pygame.K_2: 61, pygame.K_w: 62, pygame.K_3: 63,
    pygame.K_e: 64, pygame.K_r: 65, pygame.K_5: 66, pygame.K_t: 67,
    pygame.K_6: 68, pygame.K_y: 69, pygame.K_7: 70, pygame.K_u: 71,
    pygame.K_i: 72,
}
_KEY_TO_PITCH: dict[int, int] = {**_LOWER_OCTAVE, **_UPPER_OCTAVE}


def decode_message(data: list[int], timestamp: float | None = None) -> LiveNoteEvent | None:
    """Turn raw MIDI bytes into a note event; anything but note on/off is None.

    A note-on with velocity 0 is treated as a note-off.
    """
    try:
        msg = mido.Message.from_bytes(data)
    except ValueError:
        logger.debug("Ignoring malformed MIDI data %r", data)
        return None
    ts = time.time() if timestamp is None else timestamp
    if msg.type == "note_on" and msg.velocity > 0:
        return LiveNoteEvent(pitch=msg.note, velocity=msg.velocity, timestamp=ts, is_note_on=True)
    if msg.type in ("note_on", "note_off"):
        return LiveNoteEvent(pitch=msg.note, velocity=0, timestamp=ts, is_note_on=False)
    return None


class KeyboardInput:
    """Fallback input using computer keyboard mapped to piano notes."""

    def __init__(self, velocity: int = 80) -> None:
        self._velocity = velocity
        self._events: list[LiveNoteEvent] = []
        self._held: set[int] = set()

    def feed_event(self, event: pygame.event.Event) -> None:
        """Call from the game loop for each pygame event."""
        if event.type == pygame.KEYDOWN and event.key in _KEY_TO_PITCH:
            pitch = _KEY_TO_PITCH[event.key]
            if pitch not in self._held:
                self._held.add(pitch)
                self._events.append(LiveNoteEvent(
                    pitch=pitch, velocity=self._velocity,
                    timestamp=time.time(), is_note_on=True,
                ))
        elif event.type == pygame.KEYUP and event.key in _KEY_TO_PITCH:
            pitch = _KEY_TO_PITCH[event.key]
            self._held.discard(pitch)
            self._events.append(LiveNoteEvent(
                pitch=pitch, velocity=0,
                timestamp=time.time(), is_note_on=False,
            ))

    def poll(self) -> LiveNoteEvent | None:
        if self._events:
            return self._events.pop(0)
        return None

    def close(self) -> None:
        self._events.clear()
        self._held.clear()


class MidiInput:
    def __init__(self, port_index: int | None = None) -> None:
        self.midi_in = rtmidi.MidiIn()
        self._port_index = port_index
        self._open = False

    @staticmethod
    def list_ports() -> list[str]:
        return rtmidi.MidiIn().get_ports()

    def open(self) -> None:
        ports = self.midi_in.get_ports()
        if not ports:
            raise MidiDeviceError("No MIDI input devices found")
        idx = self._port_index if self._port_index is not None else 0
        if not 0 <= idx < len(ports):
            raise MidiDeviceError(f"MIDI port {idx} out of range (found {len(ports)})")
        self.midi_in.open_port(idx)
        self._open = True
        logger.info("Listening on MIDI port %s", ports[idx])

    def poll(self) -> LiveNoteEvent | None:
        """Non-blocking poll for the next note message. Returns None if there is none."""
        if not self._open:
            return None
        while True:
            msg = self.midi_in.get_message()
            if msg is None:
                return None
            data, _delta = msg
            event = decode_message(data)
            if event is not None:
                return event

    def close(self) -> None:
        if self._open:
            self.midi_in.close_port()
            self._open = False
