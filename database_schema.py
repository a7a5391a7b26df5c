"""
SQL schema for saved hairstyle analyses.
Run these queries in your Supabase SQL editor.
"""

CREATE_SAVED_ANALYSES_TABLE = """
-- Saved analyses, one row per face shape analysis a device chose to keep
CREATE TABLE IF NOT EXISTS saved_analyses (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    device_id VARCHAR(128) NOT NULL,
    face_shape VARCHAR(32) NOT NULL,
    summary TEXT NOT NULL DEFAULT '',
    image_url TEXT,
    suggestions JSONB NOT NULL DEFAULT '[]'::jsonb,
    created_at TIMESTAMPTZ DEFAULT NOW(),
    updated_at TIMESTAMPTZ DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS idx_saved_analyses_device_id ON saved_analyses(device_id);
CREATE INDEX IF NOT EXISTS idx_saved_analyses_created_at ON saved_analyses(created_at DESC);

-- Enable Row Level Security
ALTER TABLE saved_analyses ENABLE ROW LEVEL SECURITY;

-- Policy: Service role can do everything (for API)
CREATE POLICY saved_analyses_service_role_all ON saved_analyses
    FOR ALL
    USING (auth.role() = 'service_role');
"""

CREATE_IMAGES_BUCKET = """
-- Public bucket for generated hairstyle images
INSERT INTO storage.buckets (id, name, public)
VALUES ('images', 'images', true)
ON CONFLICT (id) DO NOTHING;
"""

# Combined setup script
FULL_SCHEMA_SETUP = f"""
-- =====================================================
-- Hairstyle Advisor Schema Setup
-- =====================================================
-- Run this in your Supabase SQL Editor
-- =====================================================

{CREATE_SAVED_ANALYSES_TABLE}

{CREATE_IMAGES_BUCKET}

-- =====================================================
-- Setup Complete!
-- =====================================================
"""

if __name__ == "__main__":
    print(FULL_SCHEMA_SETUP)
