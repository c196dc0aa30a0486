"""Auto-Build Schedule Engine: rebuilds a season schedule from a prior season's pattern."""
