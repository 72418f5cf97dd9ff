"""
Quick demo script to run the GameHub Insight API locally.

This script starts a local server and shows how to make requests to the endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting GameHub Insight Backend Demo")
    print("=" * 60)
    print()
    print("API Endpoints:")
    print("   - Health Check:   GET    http://localhost:8000/health")
    print("   - Games:          GET    http://localhost:8000/games?page=1&limit=12")
    print("   - Favorites:      GET    http://localhost:8000/favorites")
    print("   - Recommend:      GET    http://localhost:8000/ai/recommend")
    print("   - AI History:     GET    http://localhost:8000/ai/history")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("Authentication:")
    print("   /games reads are public. Everything else requires:")
    print("   Authorization: Bearer <supabase access token>")
    print()
    print("Test with curl:")
    print('   curl "http://localhost:8000/ai/history" \\')
    print('     -H "Authorization: Bearer $TOKEN"')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "gamehub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
