"""
Application Layer

This package wires the core into the frames-manifest command line tool.

Key Components:
- config.py: Configuration management using Pydantic settings
- cli.py: Logging and Sentry setup, interactive prompts and the sign/derive commands

The sign command reads the seed phrase from SEED_PHRASE or prompts for it,
resolves the FID with retry prompts, and writes the frame metadata document as
JSON or as a FRAME_METADATA environment line.
"""
