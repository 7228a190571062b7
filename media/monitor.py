# media/monitor.py
import time

import pygame

from config import WIN_W, WIN_H, FPS
from gesture.types import Command, MonitorState, Side
from gesture.worker import TiltWorker
from media.player import PlaylistPlayer

SIDE_COLORS = {
    Side.LEFT: (120, 170, 255),
    Side.RIGHT: (255, 170, 90),
    Side.NEUTRAL: (90, 220, 140),
}
FLASH_SEC = 0.8


def draw_gauge(screen, roll, side, neutral_deg, tilt_deg):
    # horizontal bar: -90..+90 degrees
    x0, y0, w, h = 20, 150, WIN_W - 40, 24
    pygame.draw.rect(screen, (40, 40, 46), pygame.Rect(x0, y0, w, h))

    def px(deg):
        deg = max(-90.0, min(90.0, deg))
        return int(x0 + (deg + 90.0) / 180.0 * w)

    pygame.draw.rect(screen, (50, 70, 56), pygame.Rect(px(-neutral_deg), y0, px(neutral_deg) - px(-neutral_deg), h))
    for t in (-tilt_deg, tilt_deg):
        pygame.draw.line(screen, (200, 200, 200), (px(t), y0 - 4), (px(t), y0 + h + 4), 2)
    pygame.draw.rect(screen, SIDE_COLORS[side], pygame.Rect(px(roll) - 4, y0 - 6, 8, h + 12))


def run_monitor(worker: TiltWorker, state: MonitorState, player: PlaylistPlayer = None):
    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("TiltSkip - double tilt to skip")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("Consolas", 18)
    big = pygame.font.SysFont("Consolas", 32)

    worker.start()
    print("[Main] TiltWorker started:", worker.is_alive())

    cfg = worker.engine.config
    flash_cmd = None
    flash_until = 0.0

    try:
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        return
                    # keyboard fallback
                    if event.key == pygame.K_SPACE and player is not None and not player.is_active:
                        worker.manual(player.play)
                    if event.key == pygame.K_RIGHT:
                        worker.manual(worker.commander.skip_next)
                    if event.key == pygame.K_LEFT:
                        worker.manual(worker.commander.skip_previous)

            # Consume worker state
            with worker.lock:
                roll = state.roll_deg
                side = state.side
                label = state.label
                message = state.message
                source_info = state.source_info
                cmd = state.command
                test_mode = state.test_mode
                state.command = None

            now = time.time()
            if cmd is not None:
                flash_cmd = cmd
                flash_until = now + FLASH_SEC

            screen.fill((12, 12, 14))
            hud1 = font.render(f"Roll: {roll:+6.1f} deg  |  {label}", True, (230, 230, 230))
            hud2 = font.render(f"Last: {message or '-'}", True, (200, 200, 200))
            track = player.current_track if player is not None else None
            hud3 = font.render(f"Track: {track or '-'}{'' if player is None or player.is_active else ' (SPACE to play)'}",
                               True, (180, 180, 180))
            hud4 = font.render(source_info, True, (120, 120, 120))
            screen.blit(hud1, (8, 6))
            screen.blit(hud2, (8, 30))
            screen.blit(hud3, (8, 54))
            screen.blit(hud4, (8, 78))
            if test_mode:
                screen.blit(font.render("TEST MODE (commands are not sent)", True, (255, 255, 120)), (8, 102))

            draw_gauge(screen, roll, side, cfg.neutral_zone_deg, cfg.tilt_threshold_deg)

            if flash_cmd is not None and now < flash_until:
                text = ">> NEXT" if flash_cmd == Command.NEXT else "<< PREVIOUS"
                msg = big.render(text, True, (255, 255, 255))
                screen.blit(msg, (WIN_W // 2 - msg.get_width() // 2, 210))

            pygame.display.flip()
            clock.tick(FPS)
    finally:
        worker.stop()
        if player is not None:
            player.stop()
        pygame.quit()
