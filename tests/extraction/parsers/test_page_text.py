"""Tests for pricecompare/extraction/parsers/page_text.py"""

from decimal import Decimal

from pricecompare.extraction.parsers.page_text import PageTextParser

DEPOSIT_KEYWORDS = ["pfand", "povratna naknada", "kavcija", "deposit"]


class TestPriceCandidates:
    def test_currency_suffix_and_prefix(self):
        parser = PageTextParser("Sada 1,19 € umjesto € 1,49")
        assert parser.price_candidates() == [Decimal("1.19"), Decimal("1.49")]

    def test_eur_code(self):
        assert PageTextParser("Preis 2.49 EUR").price_candidates() == [Decimal("2.49")]

    def test_thousands_separator(self):
        assert PageTextParser("1.299,00 €").price_candidates() == [Decimal("1299.00")]

    def test_no_prices(self):
        assert PageTextParser("Milbona Mlijeko 1 l").price_candidates() == []


class TestExtractDeposit:
    def test_euro_amount(self):
        parser = PageTextParser("zzgl. Pfand 0,25 €")
        assert parser.extract_deposit(DEPOSIT_KEYWORDS) == Decimal("0.25")

    def test_cents_converted(self):
        parser = PageTextParser("Pfand: 25 Cent")
        assert parser.extract_deposit(DEPOSIT_KEYWORDS) == Decimal("0.25")

    def test_multi_word_keyword(self):
        parser = PageTextParser("Povratna naknada 0,07 €")
        assert parser.extract_deposit(DEPOSIT_KEYWORDS) == Decimal("0.07")

    def test_no_deposit(self):
        assert PageTextParser("1,19 €").extract_deposit(DEPOSIT_KEYWORDS) is None
        assert PageTextParser("Pfand 0,25 €").extract_deposit([]) is None


class TestContainsAny:
    def test_case_insensitive(self):
        parser = PageTextParser("Cijena s LIDL PLUS aplikacijom")
        assert parser.contains_any(["Lidl Plus"])
        assert not parser.contains_any(["akcija", ""])
