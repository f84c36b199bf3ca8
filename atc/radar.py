import pygame
from typing import Iterable, Optional

from atc.message_log import LogEntry
from atc.objects.aircraft import AircraftSnapshot
from atc.objects.runway import Runway
from atc.utils import heading_to_vec
from constants import *


def calculate_layout(width: int, height: int) -> dict:
    """Square radar on the left sized to fit the window, sidebar on the right."""
    sidebar_width = int(width * SIDEBAR_RATIO)
    cell = max(4, min(width - sidebar_width, height) // GRID_SIZE)
    radar_size = cell * GRID_SIZE
    font_size = max(12, int(height * 0.022))

    radar_rect = pygame.Rect(0, 0, radar_size, radar_size)
    sidebar_rect = pygame.Rect(radar_size, 0, width - radar_size, height)

    return {
        "RADAR_RECT": radar_rect,
        "SIDEBAR_RECT": sidebar_rect,
        "CELL_SIZE": cell,
        "FONT_SIZE": font_size,
    }


def world_to_screen(x: float, y: float, layout: dict) -> tuple[int, int]:
    cell = layout["CELL_SIZE"]
    rect = layout["RADAR_RECT"]
    return rect.x + int(x * cell), rect.y + int(y * cell)


def screen_to_world(px: int, py: int, layout: dict) -> tuple[float, float]:
    cell = layout["CELL_SIZE"]
    rect = layout["RADAR_RECT"]
    return (px - rect.x) / cell, (py - rect.y) / cell


def wrap_text(text, font, max_width):
    words = text.split()
    lines = []
    current = ""

    for word in words:
        test = f"{current} {word}".strip()
        if font.size(test)[0] <= max_width:
            current = test
        else:
            if current:
                lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def plane_colour(plane: AircraftSnapshot):
    if plane.state == STATE_COLLIDED:
        return COLOUR_PLANE_COLLIDED
    if plane.is_selected:
        return COLOUR_PLANE_SELECTED
    if plane.state == STATE_WARNING:
        return COLOUR_PLANE_WARNING
    return COLOUR_PLANE_DEFAULT


def draw_runway(screen, runway: Runway, layout):
    cell = layout["CELL_SIZE"]

    cx, cy = world_to_screen(*runway.center, layout)
    zone = int(runway.landing_radius * cell)
    pygame.draw.circle(screen, COLOUR_RUNWAY_ZONE, (cx, cy), zone, 1)

    for col, row in runway.cells():
        x, y = world_to_screen(col, row, layout)
        pygame.draw.rect(screen, COLOUR_RUNWAY, (x, y, cell, cell))


def draw_aircraft(screen, font, plane: AircraftSnapshot, layout, blink_on=True):
    cell = layout["CELL_SIZE"]
    x, y = world_to_screen(plane.x, plane.y, layout)
    colour = plane_colour(plane)

    if plane.is_selected and plane.waypoints:
        pts = [(x, y)] + [world_to_screen(wx, wy, layout) for wx, wy in plane.waypoints]
        pygame.draw.lines(screen, COLOUR_ROUTE, False, pts, 1)
        for p in pts[1:]:
            pygame.draw.circle(screen, COLOUR_ROUTE, p, 3, 1)

    if plane.state == STATE_WARNING:
        pygame.draw.circle(screen, COLOUR_PLANE_WARNING, (x, y), WARNING_RING_TILES * cell, 1)

    if plane.state == STATE_COLLIDED and not blink_on:
        return

    pygame.draw.circle(screen, colour, (x, y), PLANE_ICON_RADIUS)

    dx, dy = heading_to_vec(plane.heading)
    end = (x + dx * PLANE_HEADING_LINE_LENGTH, y + dy * PLANE_HEADING_LINE_LENGTH)
    pygame.draw.line(screen, colour, (x, y), end, 2)

    tag = font.render(plane.callsign, True, colour)
    screen.blit(tag, (x + PLANE_TAG_OFFSET_X, y + PLANE_TAG_OFFSET_Y))


def draw_radar(screen, font, snapshot, runway: Runway, blink_on=True):
    layout = calculate_layout(*screen.get_size())
    radar_rect = layout["RADAR_RECT"]
    cell = layout["CELL_SIZE"]

    screen.fill(COLOUR_RADAR_BG, radar_rect)

    for i in range(GRID_SIZE + 1):
        off = i * cell
        pygame.draw.line(screen, COLOUR_RADAR_GRID,
                         (radar_rect.left + off, radar_rect.top), (radar_rect.left + off, radar_rect.bottom), 1)
        pygame.draw.line(screen, COLOUR_RADAR_GRID,
                         (radar_rect.left, radar_rect.top + off), (radar_rect.right, radar_rect.top + off), 1)

    draw_runway(screen, runway, layout)

    for plane in snapshot.aircraft:
        draw_aircraft(screen, font, plane, layout, blink_on)


def draw_sidebar(screen, font, snapshot, messages: Iterable[LogEntry], voice_on=False):
    layout = calculate_layout(*screen.get_size())
    rect = layout["SIDEBAR_RECT"]

    pygame.draw.rect(screen, COLOUR_SIDEBAR_BG, rect)
    pygame.draw.line(screen, COLOUR_SIDEBAR_BORDER, rect.topleft, rect.bottomleft, 1)

    x0 = rect.x + 10
    y = rect.y + 10

    collision_colour = COLOUR_STATUS_BAD if snapshot.collision_count else COLOUR_STATUS_OK
    status = [
        (f"Active aircraft: {snapshot.active_count}", COLOUR_STATUS_TEXT),
        (f"Landed: {snapshot.landed_count}", COLOUR_STATUS_TEXT),
        (f"Collisions: {snapshot.collision_count}", collision_colour),
        (f"Speed: {snapshot.speed:.1f} tiles/s", COLOUR_STATUS_TEXT),
        (f"Spawn rate: {snapshot.spawn_rate}/min", COLOUR_STATUS_TEXT),
        (f"Voice: {'on' if voice_on else 'off'}", COLOUR_STATUS_TEXT),
    ]
    if snapshot.game_over:
        status.append(("GAME OVER - press R", COLOUR_STATUS_BAD))

    for text, colour in status:
        screen.blit(font.render(text, True, colour), (x0, y))
        y += MSG_LINE_HEIGHT + 4

    y += 6
    pygame.draw.line(screen, COLOUR_SIDEBAR_BORDER, (rect.x, y), (rect.right, y), 1)
    y += 8

    for entry in messages:
        colour = COLOUR_MSG_CRITICAL if entry.text.startswith("CRITICAL") else COLOUR_MSG_TEXT
        for line in wrap_text(str(entry), font, rect.width - 20):
            if y > rect.bottom - MSG_LINE_HEIGHT:
                return
            screen.blit(font.render(line, True, colour), (x0, y))
            y += MSG_LINE_HEIGHT


def draw_performance_menu(screen, font, stats: dict):
    lines = [
        "=== PERFORMANCE PROFILE ===",
        f"FPS: {stats.get('fps', 0)}",
        f"Ticks: {stats.get('ticks', 0)}",
        f"CPU usage: {stats.get('cpu_percent', 0.0):.1f}%",
        f"Memory: {stats.get('used_mem_mb', 0.0):.0f} / {stats.get('total_mem_mb', 0.0):.0f} MB",
        f"Aircraft in fleet: {stats.get('plane_count', 0)}",
    ]

    width = 300
    height = len(lines) * 22 + 20
    surf = pygame.Surface((width, height), pygame.SRCALPHA)
    surf.fill(COLOUR_PERF_BG)

    y = 10
    for line in lines:
        surf.blit(font.render(line, True, COLOUR_PERF_TEXT), (10, y))
        y += 22

    screen.blit(surf, (10, 10))


def draw_help_window(screen, font):
    layout = calculate_layout(*screen.get_size())
    rect = layout["RADAR_RECT"].inflate(-60, -60)
    pygame.draw.rect(screen, COLOUR_HELP_BG, rect)
    pygame.draw.rect(screen, COLOUR_SIDEBAR_BORDER, rect, 1)

    x, y = rect.x + 20, rect.y + 20
    line_h = int(layout["FONT_SIZE"] * 1.2)
    for line in HELP_TEXT.strip().splitlines():
        if not line:
            y += line_h // 2
            continue
        screen.blit(font.render(line, True, COLOUR_HELP_TEXT), (x, y))
        y += line_h


def hit_test_aircraft(mouse_pos, snapshot, layout) -> Optional[AircraftSnapshot]:
    """Detect which aircraft (if any) the mouse clicked on."""
    mx, my = mouse_pos
    hit_radius = max(6, layout["CELL_SIZE"] // 2)
    for plane in reversed(snapshot.aircraft):
        px, py = world_to_screen(plane.x, plane.y, layout)
        if (px - mx) ** 2 + (py - my) ** 2 <= hit_radius ** 2:
            return plane
    return None
