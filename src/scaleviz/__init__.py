"""Scale Visualizer — scales, diatonic chords, chord recognition, and scale practice on a piano."""
