"""Output strategies for exporting a forest."""
