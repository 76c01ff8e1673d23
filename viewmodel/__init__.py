from .visualizer_vm import VisualizerViewModel, PlotPayload

__all__ = ["VisualizerViewModel", "PlotPayload"]
