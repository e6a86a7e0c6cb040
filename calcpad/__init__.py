"""calcpad — keypad calculator engine with a terminal front end.

The engine is a small state machine driven by key presses (digits, operators,
decimal point, equals, clear, backspace, percent). Results are evaluated
strictly left to right and formatted for a 12-character display.

Usage:
    python -m calcpad keys 12+7 Enter        # Type keys, show the display
    python -m calcpad run --all              # Replay built-in scenarios
    python -m calcpad repl                   # Interactive session
"""
