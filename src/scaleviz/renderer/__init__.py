"""Drawing helpers for the keyboard and HUD."""
