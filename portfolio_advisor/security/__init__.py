"""
Password tooling for account sign-up and profile editing.

Modules
-------
password_strength  : analyze_strength(): 0–5 score, feedback label and
                     ordered suggestions.  Pure, no I/O.
password_generator : generate_strong_password(): injectable random source.
"""
