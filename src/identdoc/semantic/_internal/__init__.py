"""Tree-sitter backed internals of the Go program model."""
