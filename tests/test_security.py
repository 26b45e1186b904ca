"""Unit tests for userhub.core.security: bcrypt hashing and opaque tokens."""

import unittest
from unittest.mock import patch

from userhub.core.security import (
    DEFAULT_TOKEN_LENGTH,
    TOKEN_ALPHABET,
    HashingError,
    generate_default_token,
    generate_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    """hash_password produces salted bcrypt digests; verify_password checks them."""

    def setUp(self) -> None:
        patcher = patch("userhub.core.security.BCRYPT_ROUNDS", 4)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_hash_is_not_plaintext(self) -> None:
        digest = hash_password("s3cret")
        self.assertNotEqual(digest, "s3cret")
        self.assertTrue(digest.startswith("$2"))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(hash_password("s3cret"), hash_password("s3cret"))

    def test_verify_accepts_matching_password(self) -> None:
        digest = hash_password("s3cret")
        self.assertTrue(verify_password("s3cret", digest))

    def test_verify_rejects_wrong_password(self) -> None:
        digest = hash_password("s3cret")
        self.assertFalse(verify_password("S3cret", digest))

    def test_verify_rejects_malformed_hash(self) -> None:
        self.assertFalse(verify_password("s3cret", "not-a-bcrypt-hash"))

    def test_cost_is_embedded_in_digest(self) -> None:
        self.assertIn("$04$", hash_password("pw"))

    def test_salt_source_failure_raises_hashing_error(self) -> None:
        with patch("userhub.core.security.bcrypt.gensalt", side_effect=OSError("no entropy")):
            with self.assertRaises(HashingError) as ctx:
                hash_password("pw")
        self.assertIn("no entropy", ctx.exception.message)


class TestTokens(unittest.TestCase):
    """generate_token draws from the 62-symbol alphabet."""

    def test_alphabet_has_62_symbols(self) -> None:
        self.assertEqual(len(TOKEN_ALPHABET), 62)
        self.assertEqual(len(set(TOKEN_ALPHABET)), 62)

    def test_requested_length(self) -> None:
        for length in (0, 1, 16, 64):
            self.assertEqual(len(generate_token(length)), length)

    def test_only_alphanumeric(self) -> None:
        token = generate_token(200)
        self.assertTrue(set(token) <= set(TOKEN_ALPHABET))

    def test_default_length_is_32(self) -> None:
        self.assertEqual(DEFAULT_TOKEN_LENGTH, 32)
        self.assertEqual(len(generate_default_token()), 32)

    def test_tokens_differ(self) -> None:
        self.assertNotEqual(generate_default_token(), generate_default_token())

    def test_negative_length_rejected(self) -> None:
        with self.assertRaises(ValueError):
            generate_token(-1)

    def test_random_source_failure_propagates(self) -> None:
        with patch("userhub.core.security.secrets.choice", side_effect=OSError("urandom")):
            with self.assertRaises(OSError):
                generate_default_token()


if __name__ == "__main__":
    unittest.main()
