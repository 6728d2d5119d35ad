"""OAuth1 request signing domain."""
