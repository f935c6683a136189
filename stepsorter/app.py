import argparse
import logging
import sys

import pygame

from . import settings
from .buffer import make_rng
from .playback import Command, Mode, PlaybackController
from .settings import (BACKGROUND_COLOR, BAR_SPACING, MARK_COLORS, PANEL_COLOR, PANEL_HEIGHT,
                       PANEL_LINE_COLOR, SUBTEXT_COLOR, TEXT_COLOR, WINDOW_HEIGHT, WINDOW_WIDTH)

logger = logging.getLogger(__name__)

KEY_COMMANDS = {
    pygame.K_r:     Command.RESET,
    pygame.K_UP:    Command.SPEED_UP,
    pygame.K_DOWN:  Command.SPEED_DOWN,
    pygame.K_RIGHT: Command.GROW_SIZE,
    pygame.K_LEFT:  Command.SHRINK_SIZE,
    pygame.K_s:     Command.SKIP,
}

HELP_TEXT = "[SPACE] Start/Pause  [R] Shuffle  [UP/DOWN] Speed  [LEFT/RIGHT] Size  [S] Skip  [1-6] Algo"

# ============================================================
# ======================= COLOR / DRAW =======================
# ============================================================

def build_fonts():
    # SysFont takes the first installed name and falls back to the default font
    sans = ["Segoe UI", "Tahoma", "Arial"]
    return dict(mid=pygame.font.SysFont(sans, 16), small=pygame.font.SysFont(sans, 13))


def draw_bars(screen, snap):
    n     = len(snap.values)
    bw    = WINDOW_WIDTH / n
    area  = WINDOW_HEIGHT - PANEL_HEIGHT - settings.BOTTOM_PAD
    for i, (v, m) in enumerate(zip(snap.values, snap.marks)):
        h = (v / n) * area
        pygame.draw.rect(screen, MARK_COLORS[m],
                         (i * bw, WINDOW_HEIGHT - h, max(1, bw - BAR_SPACING), h))


def draw_panel(screen, fonts, snap):
    pygame.draw.rect(screen, PANEL_COLOR, (0, 0, WINDOW_WIDTH, PANEL_HEIGHT))
    pygame.draw.line(screen, PANEL_LINE_COLOR, (0, PANEL_HEIGHT), (WINDOW_WIDTH, PANEL_HEIGHT), 1)

    status = {Mode.IDLE: "READY", Mode.RUNNING: "RUNNING",
              Mode.PAUSED: "PAUSED", Mode.FINISHED: "SORTED"}[snap.mode]
    name   = settings.algorithm_name(snap.algorithm)
    line   = (f"{name}  {settings.COMPLEXITY[snap.algorithm]}  {status}  |  "
              f"Comparisons: {snap.comparisons}  |  Writes: {snap.mutations}  |  "
              f"Speed: {snap.speed_level}  |  Size: {snap.element_count}  |  "
              f"Step {snap.cursor}/{snap.sequence_length}")
    screen.blit(fonts['mid'].render(line, True, TEXT_COLOR), (16, 14))
    screen.blit(fonts['small'].render(HELP_TEXT, True, SUBTEXT_COLOR), (16, 44))

# ============================================================
# ========================= MAIN =============================
# ============================================================

def handle_key(ctrl, key):
    if key == pygame.K_SPACE:
        snap = ctrl.snapshot()
        if snap.mode is Mode.FINISHED: ctrl.command(Command.RESET)
        elif snap.mode is Mode.IDLE:   ctrl.command(Command.START)
        else:                          ctrl.command(Command.PAUSE)
        return
    keys = settings.algorithm_keys()
    if pygame.K_1 <= key < pygame.K_1 + len(keys):
        ctrl.configure(keys[key - pygame.K_1], ctrl.element_count)
        return
    if key in KEY_COMMANDS:
        ctrl.command(KEY_COMMANDS[key])


def run(ctrl, fps):
    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption("StepSorter")
    fonts = build_fonts(); clock = pygame.time.Clock()

    while True:
        dt = clock.tick(fps) / 1000.0
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT: pygame.quit(); return
            if ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE: pygame.quit(); return
                handle_key(ctrl, ev.key)
        ctrl.tick(dt)
        snap = ctrl.snapshot()
        screen.fill(BACKGROUND_COLOR)
        draw_bars(screen, snap)
        draw_panel(screen, fonts, snap)
        pygame.display.flip()


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="stepsorter", description="Animated comparison-sort visualizer")
    p.add_argument("--settings",  default=settings.SETTINGS_JSON, help="JSON settings file")
    p.add_argument("--algorithm", choices=settings.algorithm_keys())
    p.add_argument("--size",      type=int, help="number of bars")
    p.add_argument("--speed",     type=int, help=f"{settings.SPEED_MIN}-{settings.SPEED_MAX}")
    p.add_argument("--seed",      type=int, help="seed for reproducible shuffles")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    cfg = settings.load_settings(args.settings)
    if args.algorithm: cfg["algorithm"] = args.algorithm
    if args.size is not None:
        if args.size < 1: sys.exit("--size must be positive")
        cfg["element_count"] = args.size
    if args.speed is not None: cfg["speed_level"] = settings.clamp_speed(args.speed)
    if args.seed is not None:  cfg["seed"] = args.seed

    ctrl = PlaybackController(cfg["algorithm"], cfg["element_count"], cfg["speed_level"],
                              rng=make_rng(cfg["seed"]))
    run(ctrl, cfg["fps"])


if __name__ == "__main__":
    main()
