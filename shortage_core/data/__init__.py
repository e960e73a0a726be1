"""Remote (Supabase) report storage."""
