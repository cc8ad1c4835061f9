import pygame
from maze_carver.core.grid import Grid

class Viewer:
    COLOR_BG = (10, 10, 10)
    COLOR_CELL = (200, 200, 200)
    COLOR_HEAD = (255, 215, 0) # Gold

    def __init__(self, grid: Grid, generator=None, width=1280, height=720, steps_per_frame=50):
        self.grid = grid
        self.generator = generator
        self.screen_width = width
        self.screen_height = height
        self.steps_per_frame = steps_per_frame

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.gen_finished = generator is None or generator.generated

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        zoom_x = (self.screen_width - padding * 2) / self.grid.width
        zoom_y = (self.screen_height - padding * 2) / self.grid.height
        self.cell_size = max(1.0, min(zoom_x, zoom_y))

        self.offset_x = (self.screen_width - self.grid.width * self.cell_size) / 2
        self.offset_y = (self.screen_height - self.grid.height * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Carver - {self.grid.width}x{self.grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(100.0, self.cell_size))

                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if event.buttons[0] or event.buttons[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def advance(self):
        """Runs up to steps_per_frame carves. Stopping early leaves a valid partial maze."""
        if self.gen_finished:
            return
        for _ in range(self.steps_per_frame):
            if self.generator.step() is None:
                self.gen_finished = True
                break

    def cell_rect(self, x, y):
        size = self.cell_size
        pad = max(1, int(size / 5))
        px = int(x * size + self.offset_x)
        py = int(y * size + self.offset_y)
        return pygame.Rect(px + pad, py + pad, max(1, int(size) - 2 * pad), max(1, int(size) - 2 * pad))

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)

        # Culling: only the visible cell range
        start_x = max(0, int(-self.offset_x / self.cell_size))
        start_y = max(0, int(-self.offset_y / self.cell_size))
        end_x = min(self.grid.width, int((self.surface.get_width() - self.offset_x) / self.cell_size) + 1)
        end_y = min(self.grid.height, int((self.surface.get_height() - self.offset_y) / self.cell_size) + 1)

        for y in range(start_y, end_y):
            for x in range(start_x, end_x):
                cell = self.grid.cells[y * self.grid.width + x]
                if cell == 0:
                    continue

                rect = self.cell_rect(x, y)
                pygame.draw.rect(self.surface, self.COLOR_CELL, rect)
                # Passages: bridge to the neighbor's interior
                if cell & Grid.EAST and x + 1 < self.grid.width:
                    pygame.draw.rect(self.surface, self.COLOR_CELL, rect.union(self.cell_rect(x + 1, y)))
                if cell & Grid.SOUTH and y + 1 < self.grid.height:
                    pygame.draw.rect(self.surface, self.COLOR_CELL, rect.union(self.cell_rect(x, y + 1)))

        if self.generator is not None and not self.gen_finished:
            pygame.draw.rect(self.surface, self.COLOR_HEAD, self.cell_rect(*self.generator.position))

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        status = "Done" if self.gen_finished else "Carving"
        steps = self.generator.step_count if self.generator else 0
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.width}x{self.grid.height} ({self.grid.width * self.grid.height:,})",
            f"Steps: {steps:,}",
            f"Status: {status}",
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.advance()
            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()
            self.clock.tick(60)

        pygame.quit()
