"""Restaurant back-office API."""
