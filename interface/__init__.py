"""
Interface package: ways for a person to play the engine.

Modules:
    console — Terminal game loop (vs engine, two players, engine vs engine).
              Reads moves from stdin, writes the board to stdout.
              Can be run as a standalone script: python interface/console.py
"""
