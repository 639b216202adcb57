# smw_jump/game/game.py
import sys, argparse
import pygame
from pygame import K_ESCAPE, K_TAB
from .config import (
    WIDTH, HEIGHT, FPS,
    TILE_HEIGHT, PLAYER_WIDTH, PLAYER_HEIGHT, FLOOR_Y, PLAYER_START_X,
    SHORT_JUMP_TILES, LONG_JUMP_TILES, TOLERANCE_MIN_HEIGHT, TOLERANCE_MAX_HEIGHT,
    MOVE_SPEED, DEBUG_OVERLAY,
    COLOR_BG, COLOR_FG, COLOR_FLOOR, COLOR_PLAYER,
    COLOR_MAX_LINE, COLOR_HOLD_BAR, COLOR_BAND, COLOR_BAND_MARK,
)
from .controller import JumpController, JumpSnapshot

SMOKE_SECONDS = 2.0
SMOKE_HOLD_SECONDS = 0.09   # lands inside the tolerance band -> blended jump

HELP_LINES = (
    "- Use the Left and Right keys to steer.",
    "- Tap any key to short jump",
    "- Hold any key to long jump",
    "- Press Esc to quit",
)


def parse_args():
    p = argparse.ArgumentParser(description="Super Mario World style variable-height jump demo")
    p.add_argument("--no-debug", action="store_true",
                   help="Start with the debug drawings hidden (Tab toggles).")
    p.add_argument("--smoke", action="store_true",
                   help="Run a scripted jump for a couple of seconds and exit.")
    return p.parse_args()


def steer(x: float, direction: int, dt: float) -> float:
    """Horizontal move for the demo, clamped to the window."""
    x += direction * MOVE_SPEED * dt
    return max(0.0, min(float(WIDTH - TILE_HEIGHT), x))


def draw_reference_tiles(screen):
    pygame.draw.rect(screen, COLOR_FLOOR, pygame.Rect(0, FLOOR_Y, WIDTH, HEIGHT - FLOOR_Y))
    for column_x, count in ((300, SHORT_JUMP_TILES), (500, LONG_JUMP_TILES), (700, 10)):
        for y in range(1, count + 1):
            r = pygame.Rect(column_x, FLOOR_Y - y * TILE_HEIGHT, TILE_HEIGHT, TILE_HEIGHT)
            pygame.draw.rect(screen, COLOR_FG, r, width=1)


def draw_debug(screen, snap: JumpSnapshot, player_x: float, player_top: float):
    # Highest point reached by the last jump (top and bottom of the player)
    limit_y = player_top - snap.max_reached_offset
    pygame.draw.line(screen, COLOR_MAX_LINE, (0, limit_y), (WIDTH, limit_y))
    pygame.draw.line(screen, COLOR_MAX_LINE, (0, limit_y + PLAYER_HEIGHT), (WIDTH, limit_y + PLAYER_HEIGHT))

    # How far the key was held, with the tolerance band part highlighted
    hold = snap.hold_distance
    hold_y = FLOOR_Y - hold
    if hold > 0:
        pygame.draw.rect(screen, COLOR_HOLD_BAR, pygame.Rect(10, int(hold_y), TILE_HEIGHT, int(hold)))
    if hold_y < FLOOR_Y - TOLERANCE_MIN_HEIGHT:
        if hold_y < FLOOR_Y - TOLERANCE_MAX_HEIGHT:
            hold_y = FLOOR_Y - TOLERANCE_MAX_HEIGHT
        inner = min(hold - TOLERANCE_MIN_HEIGHT, TOLERANCE_MAX_HEIGHT - TOLERANCE_MIN_HEIGHT)
        pygame.draw.rect(screen, COLOR_BAND, pygame.Rect(10, int(hold_y), TILE_HEIGHT, int(inner)))
    pygame.draw.line(screen, COLOR_BAND, (10, hold_y), (player_x, hold_y))

    for mark in (TOLERANCE_MIN_HEIGHT, TOLERANCE_MAX_HEIGHT):
        pygame.draw.line(screen, COLOR_BAND_MARK, (10, FLOOR_Y - mark), (TILE_HEIGHT + 10, FLOOR_Y - mark))


def draw_hud(screen, font, snap: JumpSnapshot, debug_on: bool):
    lines = [
        f"Offset: {snap.vertical_offset:.3f}",
        f"On Ground: {snap.grounded}",
        f"Stopwatch: {snap.elapsed_time:.3f}s",
        f"Press Tab to toggle the debug drawings ({'ON' if debug_on else 'OFF'})",
    ]
    lines.extend(HELP_LINES)
    for i, msg in enumerate(lines):
        screen.blit(font.render(msg, True, COLOR_FG), (10, 10 + i * 20))


def run():
    args = parse_args()

    pygame.init()
    pygame.display.set_caption("Super Mario World jump example")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 16)

    controller = JumpController()
    player_x = PLAYER_START_X
    player_top = FLOOR_Y - PLAYER_HEIGHT
    debug_on = DEBUG_OVERLAY and not args.no_debug

    smoke_time = 0.0 if args.smoke else None
    if smoke_time is not None:
        controller.on_press("space")

    while True:
        dt = clock.tick(FPS) / 1000.0
        if dt > 1.0 / 30.0:  # clamp stalls
            dt = 1.0 / 30.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                elif event.key == K_TAB:
                    debug_on = not debug_on
                else:
                    controller.on_press(pygame.key.name(event.key))
            if event.type == pygame.KEYUP and event.key not in (K_ESCAPE, K_TAB):
                controller.on_release(pygame.key.name(event.key))

        if smoke_time is not None:
            prev = smoke_time
            smoke_time += dt
            if prev < SMOKE_HOLD_SECONDS <= smoke_time:
                controller.on_release("space")
            if smoke_time >= SMOKE_SECONDS:
                snap = controller.snapshot()
                print(f"smoke ok: max offset {snap.max_reached_offset:.3f}px, "
                      f"grounded={snap.grounded}, landed={controller.jumps_landed}")
                pygame.quit()
                return

        controller.tick(dt)
        player_x = steer(player_x, controller.input.steer_dir, dt)
        snap = controller.snapshot()

        # --- Render ---
        screen.fill(COLOR_BG)
        draw_reference_tiles(screen)
        if debug_on:
            draw_debug(screen, snap, player_x, player_top)

        player_rect = pygame.Rect(int(player_x), int(player_top - snap.vertical_offset),
                                  PLAYER_WIDTH, PLAYER_HEIGHT)
        pygame.draw.rect(screen, COLOR_PLAYER, player_rect)
        draw_hud(screen, font, snap, debug_on)

        pygame.display.flip()


if __name__ == "__main__":
    run()
