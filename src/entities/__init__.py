"""Entity classes for the adventure world."""

from entities.item import WorldObject, ObjectFlag, HELD, NOWHERE
from entities.room import Room, Exit
from entities.world_map import WorldModel, ContainmentError

__all__ = ['WorldObject', 'ObjectFlag', 'HELD', 'NOWHERE', 'Room', 'Exit', 'WorldModel', 'ContainmentError']
