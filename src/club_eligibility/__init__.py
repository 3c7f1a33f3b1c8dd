"""Player eligibility checks for club competitions."""
