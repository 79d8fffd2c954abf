# Supabase tables: club, member
# This file documents the expected database schema
# Actual operations are handled via the record store in service.py

"""
Expected Supabase table structure:

club:
- id: bigint (primary key, identity)
- name: text (not null, unique)
- slug: text (not null, unique)
- club_logo: text (nullable) - public URL of the uploaded logo
- club_invite_id: bigint (nullable, foreign key to club_invite.id)
- created_at: timestamp (default: now())

member:
- id: bigint (primary key, identity)
- club_id: bigint (foreign key to club.id, not null)
- profile_id: uuid (foreign key to auth.users.id, not null)
- created_at: timestamp (default: now())
- unique constraint on (club_id, profile_id)

Storage bucket "club-logos" (public), objects at clubs/<slug>-<epoch ms>.<ext>

The unique indexes on club.name and club.slug are what actually keep clubs
unique; ClubProvisioningService maps their 23505 rejections to ConflictError.
"""

CLUB_TABLE = "club"
MEMBER_TABLE = "member"
