"""
Unit tests for the free-text extraction helpers.

All helpers are pure: no match means None, never an exception.
"""

from app.services.text_extraction import (
    extract_employee_count,
    extract_industry_from_text,
    extract_industry_near_name,
    extract_list_items,
    extract_location,
    extract_website,
    extract_year,
    industry_from_categories,
    normalize_company_name,
    simplify_description,
    slugify_company_name,
    year_from_date,
)


class TestNormalizeCompanyName:
    def test_lowercases_strips_punctuation_and_collapses_whitespace(self):
        assert normalize_company_name("  Infosys,  Ltd. ") == "infosys ltd"

    def test_casing_and_spacing_variants_are_equal(self):
        assert normalize_company_name("GOOGLE ") == normalize_company_name("google")

    def test_empty(self):
        assert normalize_company_name("") == ""
        assert normalize_company_name(None) == ""

    def test_slug(self):
        assert slugify_company_name("Acme Widgets, Inc.") == "acmewidgetsinc"


class TestSimplifyDescription:
    def test_removes_ipa_citation_suffix_and_trademark(self):
        text = "Etsy, Inc. (/ˈɛtsi/) is an American e-commerce company[2] focused on handmade items.™"
        assert simplify_description(text) == (
            "Etsy is an American e-commerce company focused on handmade items."
        )

    def test_removes_stylized_clause_and_suffix(self):
        text = "Google LLC (stylized as google) is an American technology company."
        assert simplify_description(text) == "Google is an American technology company."

    def test_removes_formerly_clause(self):
        text = "Meta Platforms, formerly Facebook, is an American technology conglomerate."
        assert simplify_description(text) == "Meta Platforms is an American technology conglomerate."

    def test_suffix_at_end_keeps_full_stop(self):
        text = "Beats Electronics was acquired by Apple Inc."
        assert simplify_description(text) == "Beats Electronics was acquired by Apple."

    def test_empty(self):
        assert simplify_description("") == ""
        assert simplify_description(None) == ""


class TestFieldExtractors:
    def test_year(self):
        assert extract_year("Etsy was founded in 2005 in Brooklyn.") == "2005"
        assert extract_year("The firm was established in 1981.") == "1981"

    def test_year_out_of_range_is_ignored(self):
        assert extract_year("It was founded in 1700.") is None
        assert extract_year("No dates here.") is None

    def test_location(self):
        text = "The company is headquartered in Mountain View, California."
        assert extract_location(text) == "Mountain View, California"

    def test_location_cuts_at_conjunction(self):
        assert extract_location("It is based in Bengaluru and has offices worldwide.") == "Bengaluru"

    def test_employee_count(self):
        assert extract_employee_count("It employs over 30,000 people.") == "30,000"
        assert extract_employee_count("Etsy has 1,400 employees.") == "1,400"
        assert extract_employee_count("A small team.") is None

    def test_website_requires_explicit_pattern(self):
        assert extract_website("Its website is etsy.com") == "https://etsy.com"
        assert extract_website("Visit www.etsy.com today") == "https://www.etsy.com"
        assert extract_website("Etsy sells handmade goods.") is None

    def test_industry_from_text_skips_demonyms(self):
        text = "Etsy is an American e-commerce company focused on handmade items."
        assert extract_industry_from_text(text) == "E-commerce"

    def test_industry_near_name(self):
        snippets = ["Razorpay is a fintech company based in India."]
        assert extract_industry_near_name("Razorpay", snippets) == "Fintech"

    def test_industry_near_name_without_mention(self):
        assert extract_industry_near_name("Razorpay", ["Payments in India are growing."]) is None

    def test_industry_from_categories(self):
        categories = [
            "Category:Companies listed on NASDAQ",
            "Category:American companies",
            "Category:Software companies of the United States",
            "Category:E-commerce companies",
        ]
        assert industry_from_categories(categories) == "E-commerce"

    def test_industry_from_categories_no_match(self):
        assert industry_from_categories(["Category:1998 establishments"]) is None

    def test_list_items(self):
        snippets = [
            "Acme offers rockets, anvils and traps.",
            "Acme sells anvils and tunnels.",
        ]
        assert extract_list_items(snippets, "products") == ["rockets", "anvils", "traps", "tunnels"]

    def test_year_from_date(self):
        assert year_from_date("+1998-09-04T00:00:00Z") == "1998"
        assert year_from_date("unknown") is None
