"""Terminal UI: bracket layout, rendering and the Textual application."""
