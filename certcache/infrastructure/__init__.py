"""Infrastructure: Firestore REST client and cache backends."""
