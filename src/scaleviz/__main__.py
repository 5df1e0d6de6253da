"""Entry point for `python -m scaleviz` or the `scaleviz` console script."""

import argparse
import logging

from scaleviz.scales import Mode, ScaleSelection, Variation, default_variation, variations_for


def build_selection(mode_name: str, variation_name: str | None) -> ScaleSelection:
    mode = Mode[mode_name.upper()]
    if variation_name is None:
        return ScaleSelection(mode=mode, variation=default_variation(mode))
    return ScaleSelection(mode=mode, variation=Variation[variation_name.upper()])


def main(argv: list[str] | None = None) -> None:
    variation_choices = sorted(v.name.lower() for m in Mode for v in variations_for(m))
    parser = argparse.ArgumentParser(description="Scale Visualizer — scales and diatonic chords on a piano")
    parser.add_argument("--soundfont", default=None, help="SoundFont (.sf2) used for tones")
    parser.add_argument("--midi-port", type=int, default=None, help="MIDI input port index")
    parser.add_argument("--list-midi-ports", action="store_true", help="Print MIDI input ports and exit")
    parser.add_argument("--mode", choices=[m.name.lower() for m in Mode], default="major")
    parser.add_argument("--variation", choices=variation_choices, default=None)
    parser.add_argument("--mute", action="store_true", help="Start with sound off")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.list_midi_ports:
        from scaleviz.midi_input import MidiInput

        for index, port in enumerate(MidiInput.list_ports()):
            print(f"{index}: {port}")
        return

    try:
        selection = build_selection(args.mode, args.variation)
    except ValueError as exc:
        parser.error(str(exc))

    from scaleviz.app import App

    app = App(
        soundfont=args.soundfont,
        midi_port=args.midi_port,
        selection=selection,
        audio_enabled=not args.mute,
    )
    app.run()


if __name__ == "__main__":
    main()
