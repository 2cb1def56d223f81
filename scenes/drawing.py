"""scenes/drawing.py — Shared drawing helpers.

Alpha shapes need their own SRCALPHA surface; these helpers allocate a
surface just big enough for the shape and blit it into place.
"""

from __future__ import annotations
import math
import pygame


def draw_ring_alpha(surface: pygame.Surface, color: tuple,
                    cx: int, cy: int, radius: int, width: int = 4):
    """Draw a semi-transparent circle outline."""
    if radius < 2:
        return
    r, g, b = color[:3]
    a = color[3] if len(color) > 3 else 255
    d = radius * 2 + width * 2
    cs = pygame.Surface((d, d), pygame.SRCALPHA)
    pygame.draw.circle(cs, (r, g, b, a), (d // 2, d // 2), radius, width)
    surface.blit(cs, (cx - d // 2, cy - d // 2))


def draw_cone_alpha(surface: pygame.Surface, color: tuple,
                    cx: int, cy: int, radius: int,
                    face_angle: float, half_fov: float,
                    steps: int = 24):
    """Draw a semi-transparent filled arc (vision cone wedge)."""
    if radius < 2:
        return
    r, g, b = color[:3]
    a = color[3] if len(color) > 3 else 40
    pts = [(cx, cy)]
    for i in range(steps + 1):
        ang = face_angle - half_fov + (2 * half_fov) * i / steps
        pts.append((cx + int(math.cos(ang) * radius),
                    cy + int(math.sin(ang) * radius)))
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    w = max_x - min_x + 2
    h = max_y - min_y + 2
    s = pygame.Surface((w, h), pygame.SRCALPHA)
    local_pts = [(px - min_x + 1, py - min_y + 1) for px, py in pts]
    pygame.draw.polygon(s, (r, g, b, a), local_pts)
    surface.blit(s, (min_x - 1, min_y - 1))


def draw_banner(surface: pygame.Surface, text: str, font: pygame.font.Font,
                height: int = 90, bg=(0, 0, 0, 166), color=(255, 255, 255)):
    """Dark strip across the bottom of the screen with centred text."""
    sw, sh = surface.get_size()
    strip = pygame.Surface((sw, height), pygame.SRCALPHA)
    strip.fill(bg)
    surface.blit(strip, (0, sh - height))
    img = font.render(text, True, color)
    rect = img.get_rect(center=(sw // 2, sh - height // 2))
    surface.blit(img, rect)
