"""Shop core: pricing engine, cart state controller and security middleware."""
