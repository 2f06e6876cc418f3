"""Direct-messaging server: account sign-up and sign-in over Argon2id hashes."""
