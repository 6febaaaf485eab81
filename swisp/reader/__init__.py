"""Reader: text to Expression trees."""
