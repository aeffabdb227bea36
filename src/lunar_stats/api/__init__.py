"""HTTP layer and input schemas."""
