"""
Seesaw Package
==============

Two-player seesaw tilt reflex game. Each tap reverses the tilt; the ball
slides toward the lowered end, and whoever's end it reaches loses.

Tunable parameters are in game_config.yaml.
"""
