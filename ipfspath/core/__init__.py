"""Core modules: codec, object graph, path parsing and resolution."""
