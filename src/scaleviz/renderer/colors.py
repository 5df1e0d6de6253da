"""Color palette — blue for major scales, orange for minor."""

from scaleviz.scales import Mode

# RGB tuples
BG = (15, 23, 42)
WHITE_KEY = (255, 255, 255)
BLACK_KEY = (30, 41, 59)
KEY_BORDER = (203, 213, 225)
KEY_LABEL = (148, 163, 184)
HELD_KEY = (74, 222, 128)
HUD_TEXT = (226, 232, 240)
HUD_DIM = (100, 116, 139)

# (root, white scale key, black scale key)
MODE_COLORS: dict[Mode, tuple[tuple[int, int, int], tuple[int, int, int], tuple[int, int, int]]] = {
    Mode.MAJOR: ((37, 99, 235), (191, 219, 254), (96, 165, 250)),
    Mode.MINOR: ((234, 88, 12), (254, 215, 170), (251, 146, 60)),
}
