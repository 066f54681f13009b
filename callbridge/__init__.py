"""Call Bridge: invitation-gated introductions and credit-metered calls."""
