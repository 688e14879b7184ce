import pygame
from constants import UI_ROUND_RECT_RADIUS


def draw_rounded_rect(surface, color, rect, radius=UI_ROUND_RECT_RADIUS, border_thickness=0, border_color=None):
    """Filled rectangle with rounded corners and an optional border."""
    pygame.draw.rect(surface, color, rect, 0, border_radius=radius)
    if border_thickness > 0 and border_color:
        pygame.draw.rect(surface, border_color, rect, border_thickness, border_radius=radius)


def draw_text(surface, text, font, color, center_pos=None, topleft=None, antialias=True):
    """Draws text centered at center_pos (or anchored at topleft) and returns its rect."""
    text_surface = font.render(str(text), antialias, color)
    if topleft is not None:
        text_rect = text_surface.get_rect(topleft=topleft)
    else:
        text_rect = text_surface.get_rect(center=center_pos)
    surface.blit(text_surface, text_rect)
    return text_rect


def cell_size_for(area_rect, grid_width, grid_height):
    return max(4, min(area_rect.width // grid_width, area_rect.height // grid_height))


def cell_color(cell, colors):
    """Picks the fill for one cell; start/end win over overlays, path wins over visited."""
    if cell.is_wall:
        return colors["wall"]
    if cell.is_start:
        return colors["start"]
    if cell.is_end:
        return colors["end"]
    if cell.is_path:
        return colors["path"]
    if cell.is_visited:
        return colors["visited"]
    return colors["floor"]
