"""
MyRoster: command interpreter for a teaching assistant's tutorials, labs and consultations.
"""
