"""
services/ - Business Logic Layer
================================
Card parsing, scheduling, and the workflows behind each CLI command.
Services talk to repositories and never print except for the
interactive drill and create prompts.
"""
