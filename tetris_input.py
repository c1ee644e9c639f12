
"""Key bindings and the periodic DOWN timer"""
from typing import Dict, Optional
import pygame
from tetris_config import CONFIG, DELAY_MS, SPEED_MAX
from tetris_game import Verb

KEY_VERBS: Dict[int, Verb] = {
    pygame.K_j: Verb.LEFT, pygame.K_4: Verb.LEFT, pygame.K_LEFT: Verb.LEFT,
    pygame.K_l: Verb.RIGHT, pygame.K_6: Verb.RIGHT, pygame.K_RIGHT: Verb.RIGHT,
    pygame.K_k: Verb.ROTATE, pygame.K_5: Verb.ROTATE, pygame.K_UP: Verb.ROTATE,
    pygame.K_n: Verb.DROP, pygame.K_0: Verb.DROP, pygame.K_SPACE: Verb.DROP,
    pygame.K_DOWN: Verb.DOWN,
}


def verb_for_key(key: int) -> Optional[Verb]:
    return KEY_VERBS.get(key)


def delay_for_speed(speed: int) -> int:
    """ms between DOWN ticks; speed 0 is slowest, SPEED_MAX has no delay."""
    speed = max(0, min(SPEED_MAX, speed))
    return int(DELAY_MS - speed / SPEED_MAX * DELAY_MS)


class DropTimer:
    def __init__(self):
        self.acc = 0

    def reset(self):
        self.acc = 0

    def update(self, dt) -> int:
        """Advance by dt ms and return how many DOWN ticks are due."""
        delay = delay_for_speed(CONFIG["SPEED"])
        if delay <= 0:
            self.acc = 0
            return 1
        self.acc += dt
        due = 0
        while self.acc >= delay:
            self.acc -= delay
            due += 1
        return due
