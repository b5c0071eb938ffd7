"""Runtime wiring for the crash guard."""
