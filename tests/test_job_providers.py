import sys
import unittest
from pathlib import Path
from urllib.parse import parse_qs, urlparse

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.services.job_providers import PROVIDERS, find_provider_for_host, select_provider  # noqa: E402


class ProviderRegistryTests(unittest.TestCase):
    def test_registry_has_unique_named_providers(self):
        names = [provider.name for provider in PROVIDERS]
        self.assertEqual(len(names), len(set(names)))
        self.assertEqual(len(PROVIDERS), 6)

    def test_select_provider_depends_only_on_seed_modulo_count(self):
        count = len(PROVIDERS)
        for seed in (0, 1, 5, 123456, -2**31):
            with self.subTest(seed=seed):
                self.assertIs(select_provider(seed), select_provider(seed + count * 7 if seed >= 0 else seed - count * 7))
        self.assertIs(select_provider(0), PROVIDERS[0])
        self.assertIs(select_provider(-3), select_provider(3))

    def test_every_builder_returns_https_search_url(self):
        for provider in PROVIDERS:
            with self.subTest(provider=provider.name):
                url = provider.build_url("backend engineer", "Canva", "Berlin", False)
                self.assertTrue(url.startswith("https://"))
                parsed = urlparse(url)
                self.assertTrue(provider.matches_host(parsed.hostname))
                flattened = " ".join(value for values in parse_qs(parsed.query).values() for value in values)
                self.assertIn("backend engineer", flattened)
                self.assertIn("Canva", flattened)
                self.assertIn("Berlin", flattened)

    def test_linkedin_remote_filter(self):
        linkedin = PROVIDERS[0]
        params = parse_qs(urlparse(linkedin.build_url("sre", None, None, True)).query)
        self.assertEqual(params["keywords"], ["sre remote"])
        self.assertEqual(params["f_WT"], ["2"])
        self.assertNotIn("location", params)

    def test_host_lookup(self):
        self.assertEqual(find_provider_for_host("www.linkedin.com").name, "LinkedIn")
        self.assertEqual(find_provider_for_host("au.indeed.com").name, "Indeed")
        self.assertEqual(find_provider_for_host("WWW.SEEK.COM.AU").name, "Seek")
        self.assertIsNone(find_provider_for_host("evil-linkedin.com"))
        self.assertIsNone(find_provider_for_host("boards.greenhouse.io"))
        self.assertIsNone(find_provider_for_host(""))


if __name__ == "__main__":
    unittest.main()
