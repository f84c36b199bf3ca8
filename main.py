import os
import sys
import time
import logging
import datetime
import traceback

import psutil

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"
import pygame

from atc import voice
from atc.config import SimConfig
from atc.message_log import MessageLog
from atc.radar import (
    calculate_layout, screen_to_world, hit_test_aircraft,
    draw_radar, draw_sidebar, draw_performance_menu, draw_help_window,
)
from atc.simulation import Simulation
from atc.utils import clamp
from constants import (
    FPS, WIDTH, HEIGHT, WINDOW_MAIN, DEFAULT_FONT, CONFIG_FILE, ERROR_LOG_FILE,
    LOG_DIR, LOG_RETENTION_DAYS, MIN_SPEED, MAX_SPEED, SPEED_STEP, MAX_SPAWN_RATE,
)

log = logging.getLogger("atc")
message_log = MessageLog()
fatal_error = None

FUNCTION_KEYS = {
    "help": pygame.K_F1,
    "performance": pygame.K_F2,
    "voice_response": pygame.K_F3,
}


def cleanup_old_logs(log_dir=LOG_DIR, days=LOG_RETENTION_DAYS):
    if not os.path.exists(log_dir):
        return

    cutoff = time.time() - (days * 86400)

    deleted = 0
    for fname in os.listdir(log_dir):
        fpath = os.path.join(log_dir, fname)
        if not os.path.isfile(fpath):
            continue

        try:
            if os.path.getmtime(fpath) < cutoff:
                os.remove(fpath)
                deleted += 1
        except OSError as e:
            log.warning("Could not remove old log %s: %s", fpath, e)

    if deleted:
        log.info("Deleted %d old log file(s) from %s", deleted, log_dir)


def setup_logging():
    os.makedirs(LOG_DIR, exist_ok=True)
    session_name = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    session_log_path = os.path.join(LOG_DIR, f"session_{session_name}.txt")

    file_handler = logging.FileHandler(session_log_path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))

    log.setLevel(logging.DEBUG)
    log.addHandler(file_handler)
    log.addHandler(message_log)
    log.addHandler(voice.VoiceCallouts(logging.INFO))


def handle_exception(exc_type, exc_value, exc_traceback):
    """Log uncaught exceptions and freeze the sim gracefully."""
    global fatal_error

    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
    error_text = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    entry = f"[{timestamp}]\n{error_text}\n{'-' * 60}\n"

    with open(ERROR_LOG_FILE, "a", encoding="utf-8") as f:
        f.write(entry)

    fatal_error = entry
    log.error("Fatal error logged - see %s", ERROR_LOG_FILE)


sys.excepthook = handle_exception


def load_config() -> SimConfig:
    if os.path.isfile(CONFIG_FILE):
        config = SimConfig.load_from_json(CONFIG_FILE)
        if config:
            log.info("Loaded configuration from %s", CONFIG_FILE)
            return config
        log.warning("Falling back to default configuration.")
    return SimConfig()


def handle_keyboard_input(event, state):
    """Process all keyboard input events."""
    sim: Simulation = state["sim"]
    key = event.key

    if key == pygame.K_UP:
        sim.set_speed(clamp(round(sim.speed + SPEED_STEP, 1), MIN_SPEED, MAX_SPEED))
    elif key == pygame.K_DOWN:
        sim.set_speed(clamp(round(sim.speed - SPEED_STEP, 1), MIN_SPEED, MAX_SPEED))
    elif key == pygame.K_RIGHT:
        sim.set_spawn_rate(min(MAX_SPAWN_RATE, sim.spawn_rate + 1))
    elif key == pygame.K_LEFT:
        sim.set_spawn_rate(max(0, sim.spawn_rate - 1))
    elif key == pygame.K_SPACE:
        sim.spawn_one()
    elif key == pygame.K_r:
        message_log.clear()
        sim.reset()
    elif key == FUNCTION_KEYS["help"]:
        state["show_help"] = not state["show_help"]
    elif key == FUNCTION_KEYS["performance"]:
        state["show_performance"] = not state["show_performance"]
    elif key == FUNCTION_KEYS["voice_response"]:
        voice.set_voice_enabled(not voice.voice_enabled())
        log.info("Voice callouts %s.", "enabled" if voice.voice_enabled() else "disabled")


def handle_mouse_input(event, state, layout):
    """Left click selects an aircraft or sends the selected one to the clicked point."""
    if event.button != 1:
        return

    sim: Simulation = state["sim"]
    if not layout["RADAR_RECT"].collidepoint(event.pos):
        return

    hit = hit_test_aircraft(event.pos, sim.snapshot(), layout)
    if hit:
        sim.select_aircraft(hit.id)
    else:
        sim.click(screen_to_world(*event.pos, layout))


def update_simulation(state, elapsed):
    if fatal_error:
        return
    try:
        state["sim"].advance(elapsed)
    except Exception:
        handle_exception(*sys.exc_info())


def performance_stats(state, clock) -> dict:
    mem = psutil.virtual_memory()
    return {
        "fps": int(clock.get_fps()),
        "ticks": state["sim"].ticks,
        "cpu_percent": psutil.cpu_percent(interval=None),
        "used_mem_mb": mem.used / (1024 ** 2),
        "total_mem_mb": mem.total / (1024 ** 2),
        "plane_count": len(state["sim"].fleet),
    }


def main():
    setup_logging()
    cleanup_old_logs()

    pygame.init()
    pygame.key.set_repeat(300, 50)
    pygame.display.set_caption(WINDOW_MAIN)
    screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
    clock = pygame.time.Clock()

    sim = Simulation(load_config())
    log.info("Initial speed set to %.1f tiles/sec.", sim.speed)
    log.info("Initial spawn rate set to %d planes/min.", sim.spawn_rate)
    log.info("Runway positioned in center of airspace.")

    state = {
        "sim": sim,
        "show_help": False,
        "show_performance": False,
    }

    running = True
    while running:
        elapsed = clock.tick(FPS) / 1000.0
        layout = calculate_layout(*screen.get_size())

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                layout = calculate_layout(event.w, event.h)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                handle_mouse_input(event, state, layout)
            elif event.type == pygame.KEYDOWN:
                handle_keyboard_input(event, state)

        update_simulation(state, elapsed)

        font = pygame.font.SysFont(DEFAULT_FONT, layout["FONT_SIZE"])
        snapshot = sim.snapshot()
        blink_on = (pygame.time.get_ticks() // 500) % 2 == 0

        draw_radar(screen, font, snapshot, sim.airspace.runway, blink_on)
        draw_sidebar(screen, font, snapshot, message_log.entries, voice.voice_enabled())

        if state["show_performance"]:
            draw_performance_menu(screen, font, performance_stats(state, clock))
        if state["show_help"]:
            draw_help_window(screen, font)

        pygame.display.flip()

    sim.stop()
    voice.shutdown()
    pygame.quit()


if __name__ == "__main__":
    main()
