#!/usr/bin/env python3

"""
Null Pointer Plugin

Serves as a base class for other Pointer plugins.  Can be used on its own for
headless operation, where the mouse is driven programmatically with move_by(),
set_button() and add_wheel().

Movement is accumulated between polls.  The emulated mouse collects the deltas
when it next builds a packet, and each delta is cleared once read, so nothing
is lost or counted twice however often the host reports motion.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import BUTTON_LEFT, BUTTON_MIDDLE, BUTTON_RIGHT, NUM_BUTTONS


class PointerError(Exception):
    pass


def clamp(value, minimum, maximum):
    return min(max(value, minimum), maximum)


class Pointer:
    def __init__(self, num_buttons=NUM_BUTTONS):
        if num_buttons < NUM_BUTTONS:
            raise PointerError("At least {} buttons are required".format(NUM_BUTTONS))

        self.num_buttons = num_buttons
        self.reset()

    def reset(self):
        self.buttons = [False] * self.num_buttons
        self.pos_x = 0
        self.pos_y = 0
        self.delta_x = 0
        self.delta_y = 0
        self.delta_wheel = 0
        self.changed = False

    def move_to(self, x, y):
        # Hosts report absolute positions, so turn them into relative motion
        self.delta_x += x - self.pos_x
        self.delta_y += y - self.pos_y
        self.pos_x = x
        self.pos_y = y
        self.changed = True

    def move_by(self, dx, dy):
        self.delta_x += dx
        self.delta_y += dy
        self.pos_x += dx
        self.pos_y += dy
        self.changed = True

    def set_button(self, button, pressed):
        if 0 <= button < self.num_buttons:
            self.buttons[button] = pressed
            self.changed = True

    def add_wheel(self, delta):
        self.delta_wheel += delta
        self.changed = True

    def has_changed_state(self):
        changed = self.changed
        self.changed = False
        return changed

    def get_delta_x(self, minimum, maximum, negate=False):
        delta = clamp(-self.delta_x if negate else self.delta_x, minimum, maximum)
        self.delta_x = 0
        return delta

    def get_delta_y(self, minimum, maximum, negate=False):
        delta = clamp(-self.delta_y if negate else self.delta_y, minimum, maximum)
        self.delta_y = 0
        return delta

    def get_delta_wheel(self, minimum, maximum):
        delta = clamp(self.delta_wheel, minimum, maximum)
        self.delta_wheel = 0
        return delta

    def is_left_pressed(self):
        return self.buttons[BUTTON_LEFT]

    def is_middle_pressed(self):
        return self.buttons[BUTTON_MIDDLE]

    def is_right_pressed(self):
        return self.buttons[BUTTON_RIGHT]

    def process_messages(self):
        return False  # Don't exit the program

    def shutdown(self):
        pass
