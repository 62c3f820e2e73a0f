"""
gravity4.interfaces - User-facing front ends for the game engine
"""
