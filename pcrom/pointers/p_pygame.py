#!/usr/bin/env python3

"""
PyGame Pointer Plugin

Drains mouse events from the PyGame queue and feeds them into the pointer
state.  This should be polled at most once per emulated frame, as checking the
queue is time consuming.

PyGame numbers its buttons from 1 (left, middle, right, then the wheel on older
versions), so these are mapped down onto the three emulated buttons.  Wheel
buttons 4 and 5 are ignored, as MOUSEWHEEL events are also sent for them.
Note that PyGame's wheel runs positive when scrolled away from the user, which
is the opposite of the emulated wheel, so it is flipped.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .p_null import Pointer as PointerBase
from ..constants import BUTTON_LEFT, BUTTON_MIDDLE, BUTTON_RIGHT

PYGAME_BUTTONS = {
    1: BUTTON_LEFT,
    2: BUTTON_MIDDLE,
    3: BUTTON_RIGHT
}


class Pointer(PointerBase):
    def __init__(self):
        self.pygame_methods = {
            pygame.QUIT:            self._pygame_quit,
            pygame.MOUSEMOTION:     self._pygame_mousemotion,
            pygame.MOUSEBUTTONDOWN: self._pygame_mousebuttondown,
            pygame.MOUSEBUTTONUP:   self._pygame_mousebuttonup,
            pygame.MOUSEWHEEL:      self._pygame_mousewheel
        }

        super().__init__()

    def process_messages(self):
        quit_program = False

        for event in pygame.event.get():
            if self.handle_event(event):
                quit_program = True  # Process more events, even if planning to quit

        return quit_program

    def handle_event(self, event):
        pygame_method = self.pygame_methods.get(event.type)
        return bool(pygame_method and pygame_method(event))

    def _pygame_quit(self, _):
        return True

    def _pygame_mousemotion(self, event):
        self.move_to(*event.pos)
        return False

    def _pygame_mousebuttondown(self, event):
        button = PYGAME_BUTTONS.get(event.button)

        if button is not None:
            self.set_button(button, True)

        return False

    def _pygame_mousebuttonup(self, event):
        button = PYGAME_BUTTONS.get(event.button)

        if button is not None:
            self.set_button(button, False)

        return False

    def _pygame_mousewheel(self, event):
        self.add_wheel(-event.y)
        return False
