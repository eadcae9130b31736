"""Core models, rendering and the text handler."""
