"""Qt widgets for the visualizer window."""
