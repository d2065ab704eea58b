"""Report renderers — Rich terminal table and JSON."""
