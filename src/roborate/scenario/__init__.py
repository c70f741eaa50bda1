"""Work order contract and loaders."""
