"""Value model: expressions, lambdas and environments."""
