"""Command-line interface for placing, cancelling and listing limit orders."""
