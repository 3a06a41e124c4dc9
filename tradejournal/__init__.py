"""Trading journal service: trade log, strategy checklists and performance analytics."""
