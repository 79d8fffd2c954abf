# Supabase tables: club_invite (+ club.club_invite_id back-reference)
# This file documents the expected database schema

"""
club_invite:
- id: bigint (primary key, identity)
- token: text (not null, unique) - uuid4 string
- created_at: timestamp (default: now())

club.club_invite_id points at the club's current invite. Older rows are
never deleted or updated, so their tokens keep resolving.
"""

CLUB_TABLE = "club"
INVITE_TABLE = "club_invite"
