from .chronological import ChronologicalSplitter
