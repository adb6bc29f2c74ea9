"""Going to Quasar — window, event loop and scene regeneration."""

from __future__ import annotations

import logging

import pygame

from .constants import FPS, SCREEN_HEIGHT, SCREEN_WIDTH, TITLE, ZOOM_BUTTONS
from .models.scene import Scene, generate_scene
from .ui.renderer import FrameRenderer, PointerState

logger = logging.getLogger(__name__)


class Sketch:
    """Owns the current scene and drives one redraw per display tick."""

    def __init__(
        self,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        seed: int | None = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.running = True

        self.renderer = FrameRenderer()
        self.pointer = PointerState()
        self.frame_count = 0
        self.scene: Scene = generate_scene(width, height, seed)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        while self.running:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                self.handle_event(event)
            if not self.running:
                break
            self.step()
            pygame.display.flip()

        pygame.quit()

    def step(self) -> None:
        """Draw one frame of the current scene."""
        self.frame_count += 1
        self.renderer.draw(self.screen, self.scene, self.frame_count, self.pointer)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.type == pygame.VIDEORESIZE:
            # set_mode treats a zero side as "use the desktop size"
            width, height = max(1, event.w), max(1, event.h)
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
            self.regenerate(width, height)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 3:
                self.regenerate()
            elif event.button in ZOOM_BUTTONS:
                self.pointer = PointerState(True, *event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button in ZOOM_BUTTONS:
            self.pointer = PointerState(False, *event.pos)
        elif event.type == pygame.MOUSEMOTION:
            self.pointer = PointerState(self.pointer.pressed, *event.pos)

    def regenerate(self, width: int | None = None, height: int | None = None) -> None:
        """Throw the current scene away and build a new one."""
        width = width if width is not None else self.screen.get_width()
        height = height if height is not None else self.screen.get_height()
        self.scene = generate_scene(width, height)
        logger.info(
            "Regenerated scene seed=%s at %sx%s with %s planets",
            self.scene.seed, width, height, len(self.scene.planets),
        )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    Sketch().run()


if __name__ == "__main__":
    main()
