"""Flow and cut algorithms over `ResidualNetwork` and undirected edge lists."""
