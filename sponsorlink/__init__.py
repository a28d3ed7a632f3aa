"""SponsorLink notification service package."""
