"""Forum moderation core: trust states, review queue and moderator verdicts."""
