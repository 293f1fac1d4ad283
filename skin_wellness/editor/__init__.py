"""
editor/ - Category detail editor state machine
"""
