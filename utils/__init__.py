"""Library Circulation - shared helpers

- Input validation (validators.py)
- Output rendering for the CLI (ui_helpers.py)
"""
