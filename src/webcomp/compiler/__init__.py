"""Template emission compiler."""
