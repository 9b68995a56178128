"""
Quick demo script to run the /api/ask endpoint locally.

This script starts a local server and shows how to make requests to the endpoint.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Product Review Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET  http://localhost:5000/health")
    print("   - Ask:           POST http://localhost:5000/api/ask")
    print("   - API Docs:           http://localhost:5000/docs")
    print()
    print("🔑 Required environment (.env):")
    print("   GEMINI_API_KEY, SERP_API_KEY, SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:5000/api/ask" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"prompt": "is the Pixel 9 worth it", "chatId": "<chat-id>", "userId": "<user-id>"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:5000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=5000,
        reload=True,
        log_level="info"
    )
