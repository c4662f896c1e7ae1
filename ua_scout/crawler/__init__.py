"""Round-based same-site crawler: frontier, fetcher, worker pool and controller."""
