"""Fruit Catcher: tilt two colored markers to move the basket."""
