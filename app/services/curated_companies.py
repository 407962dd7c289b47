"""
Curated Company Table

Hand-authored profiles for a handful of well-known employers.
This is the ONLY place where company-specific literals live:
- CuratedAdapter uses it as the penultimate fallback (substring match)
- ensure_complete_data uses it for exact-name enrichment

Values are based on public information and are deliberately small.
"""

from typing import Dict, Optional

from app.schemas.schemas import PartialProfile, CompanyCulture, InterviewProcess, ProfileSource
from app.services.text_extraction import normalize_company_name


# ============================================================
# TABLE (keys are normalized names)
# ============================================================

CURATED_COMPANIES: Dict[str, PartialProfile] = {
    "etsy": PartialProfile(
        name="Etsy",
        description=(
            "Etsy is an American e-commerce company focused on handmade or vintage "
            "items and craft supplies."
        ),
        extended_description=[
            "The company connects creative entrepreneurs with buyers looking for unique, "
            "personalized or handcrafted items that can't be found in traditional retail.",
            "Etsy was founded in 2005 and has grown into a global marketplace with millions "
            "of active buyers and sellers.",
            "The platform allows sellers to set up online shops where they can list their "
            "products for a small fee.",
        ],
        industry="E-commerce, Online Marketplace, Retail",
        founded="2005",
        headquarters="Brooklyn, New York, NY",
        employee_count="1,400+",
        revenue="$2.3 billion (2022)",
        website="https://www.etsy.com",
        key_people=["Josh Silverman (CEO)", "Rob Kalin (Co-founder)"],
        business_segments=["Handmade Products", "Vintage Items", "Craft Supplies", "Digital Products"],
        technologies=["Cloud Computing", "Mobile Applications", "Payment Processing",
                      "Search Algorithms", "Recommendation Systems"],
        products=["Handmade Items", "Vintage Products", "Craft Supplies", "Digital Downloads"],
        services=["Seller Platform", "Etsy Payments", "Advertising Solutions", "Etsy Plus"],
        culture=CompanyCulture(
            work_life_balance="Focus on work-life balance and employee wellbeing",
            learning_opportunities="Ongoing professional development and learning",
            team_environment="Collaborative and inclusive workplace",
            values=["Sustainability", "Community", "Authenticity", "Creativity", "Entrepreneurship"],
        ),
        interview_process=InterviewProcess(
            rounds=[
                "Initial recruiter phone screen (30-45 minutes)",
                "Technical/Role assessment or take-home project",
                "Virtual onsite with 4-5 interviews",
                "Final conversation with hiring manager",
            ],
            typical_duration="3-5 weeks",
            tips=[
                "Show genuine interest in Etsy's marketplace and its sellers",
                "Prepare examples of collaborative, cross-functional work",
                "Be ready to discuss craft, creativity and community",
            ],
            common_questions=[
                "Why do you want to work at Etsy?",
                "How would you improve the buyer or seller experience?",
                "Tell me about a project you are proud of",
            ],
        ),
    ),
    "google": PartialProfile(
        name="Google",
        description=(
            "Google LLC is an American multinational technology company focusing on online "
            "advertising, search engine technology, cloud computing, software and AI."
        ),
        extended_description=[
            "Google was founded in 1998 by Larry Page and Sergey Brin while they were PhD "
            "students at Stanford University.",
            "It is a subsidiary of Alphabet Inc. and one of the most valuable brands in the world.",
        ],
        industry="Technology, Internet, Cloud Computing",
        founded="1998",
        headquarters="Mountain View, California, United States",
        employee_count="180,000+",
        revenue="$305 billion (2023, Alphabet)",
        website="https://www.google.com",
        key_people=["Sundar Pichai (CEO)", "Larry Page (Co-founder)", "Sergey Brin (Co-founder)"],
        business_segments=["Google Services", "Google Cloud", "Other Bets"],
        technologies=["Artificial Intelligence", "Machine Learning", "Cloud Computing",
                      "Distributed Systems", "Search Algorithms"],
        products=["Google Search", "Android", "Chrome", "YouTube", "Gmail", "Google Maps"],
        services=["Google Cloud Platform", "Google Ads", "Google Workspace"],
        culture=CompanyCulture(
            work_life_balance="Strong emphasis on work-life balance with flexible policies",
            learning_opportunities="Access to cutting-edge technology, research and internal courses",
            team_environment=(
                "Collaborative and innovation-focused culture that encourages creativity "
                "and data-driven decision making"
            ),
            values=["Focus on the user", "Innovation", "Openness", "Data-driven decisions"],
        ),
        interview_process=InterviewProcess(
            rounds=[
                "Resume screening",
                "Phone screening with recruiter",
                "Technical phone interview with an engineer",
                "Onsite interviews (4-5 rounds)",
                "Hiring committee review",
                "Team matching and offer",
            ],
            typical_duration="4-8 weeks",
            tips=[
                "Practice algorithm and system design questions",
                "Use the STAR method for behavioral questions",
                "Research Google's products and recent innovations",
                "Demonstrate problem-solving and analytical thinking",
            ],
            common_questions=[
                "How would you improve a Google product?",
                "Tell me about a time you solved a complex technical problem",
                "How do you handle ambiguity?",
                "Design a system for X scale",
            ],
        ),
        rating="4.5/5",
        pros=[
            "Excellent compensation and benefits package",
            "Challenging technical problems to solve",
            "Opportunities to work on influential products",
            "Strong emphasis on work-life balance",
            "Access to cutting-edge technology and research",
        ],
        cons=[
            "Large organization can be bureaucratic",
            "Promotion process can be challenging",
            "Some projects may be canceled unexpectedly",
            "Work can vary greatly between teams",
        ],
        benefits=[
            "Comprehensive health insurance",
            "Generous 401(k) matching",
            "Free meals and snacks",
            "On-site wellness services",
            "Extended parental leave policies",
        ],
    ),
    "microsoft": PartialProfile(
        name="Microsoft",
        description=(
            "Microsoft Corporation is an American multinational technology company that "
            "produces software, consumer electronics, personal computers and cloud services."
        ),
        extended_description=[
            "Microsoft was founded in 1975 by Bill Gates and Paul Allen.",
            "Its best-known products include the Windows operating systems, Microsoft 365 "
            "and the Azure cloud platform.",
        ],
        industry="Technology, Software, Cloud Computing",
        founded="1975",
        headquarters="Redmond, Washington, United States",
        employee_count="220,000+",
        revenue="$211 billion (2023)",
        website="https://www.microsoft.com",
        key_people=["Satya Nadella (CEO)", "Bill Gates (Co-founder)"],
        business_segments=["Productivity and Business Processes", "Intelligent Cloud",
                           "More Personal Computing"],
        technologies=["Cloud Computing", "Artificial Intelligence", "Operating Systems",
                      "Developer Tools"],
        products=["Windows", "Microsoft 365", "Xbox", "Surface", "Teams"],
        services=["Azure", "LinkedIn", "GitHub", "Dynamics 365"],
        interview_process=InterviewProcess(
            rounds=[
                "Initial HR screen",
                "Technical phone interview",
                "Virtual or onsite loop with 4-5 interviews",
                "As-appropriate meetings with senior management",
            ],
            typical_duration="3-6 weeks",
            tips=[
                "Understand Microsoft's cloud and enterprise offerings",
                "Be familiar with their leadership principles",
                "Prepare examples of team collaboration",
                "Practice coding and system design for technical roles",
            ],
            common_questions=[
                "Why Microsoft?",
                "How would you improve Azure or Microsoft 365?",
                "Describe a situation where you influenced others without authority",
                "How do you keep up with technology trends?",
            ],
        ),
    ),
    "infosys": PartialProfile(
        name="Infosys",
        description=(
            "Infosys Limited is an Indian multinational information technology company that "
            "provides business consulting, information technology and outsourcing services."
        ),
        industry="Information Technology, Consulting, Outsourcing",
        founded="1981",
        headquarters="Bengaluru, Karnataka, India",
        employee_count="300,000+",
        revenue="$18.2 billion (2023)",
        website="https://www.infosys.com",
        key_people=["Salil Parekh (CEO)", "N. R. Narayana Murthy (Founder)"],
        business_segments=["Financial Services", "Retail", "Communications", "Energy & Utilities",
                           "Manufacturing"],
        technologies=["Cloud Computing", "Artificial Intelligence", "Enterprise Software",
                      "Digital Transformation"],
        products=["Finacle", "Infosys Cobalt", "Infosys Topaz"],
        services=["IT Consulting", "Application Development", "Business Process Management"],
        interview_process=InterviewProcess(
            rounds=[
                "Online aptitude and reasoning test",
                "Technical interview",
                "HR interview",
            ],
            typical_duration="2-4 weeks",
            tips=[
                "Practice quantitative aptitude and logical reasoning",
                "Revise programming fundamentals and DBMS basics",
                "Be clear about relocation and shift flexibility",
            ],
            common_questions=[
                "Tell me about yourself",
                "Explain a project from your resume",
                "Why Infosys?",
            ],
        ),
    ),
    "razorpay": PartialProfile(
        name="Razorpay",
        description=(
            "Razorpay is an Indian fintech company that provides payment gateway services to "
            "businesses. Founded in 2014 by Harshil Mathur and Shashank Kumar, it has grown "
            "into one of India's leading payment solutions providers."
        ),
        extended_description=[
            "The company offers payment gateway, business banking, lending and payroll management.",
            "It became a unicorn startup in 2020 when it reached a valuation of over $1 billion.",
            "Razorpay is known for its developer-friendly APIs and robust technology infrastructure.",
        ],
        industry="Financial Technology, Payments",
        founded="2014",
        headquarters="Bengaluru, Karnataka, India",
        employee_count="3,000+",
        website="https://www.razorpay.com",
        key_people=["Harshil Mathur (CEO, Co-founder)", "Shashank Kumar (CTO, Co-founder)"],
        products=["Payment Gateway", "RazorpayX", "Razorpay Capital", "Payroll"],
        services=["Payment Processing", "Business Banking", "Lending"],
        culture=CompanyCulture(
            work_life_balance="Fast-paced startup environment; balance varies between teams",
            learning_opportunities="Cutting-edge fintech work with high ownership",
            team_environment="High-energy startup culture with a flat organization structure",
            values=["Technical excellence", "Customer obsession", "Moving quickly"],
        ),
        interview_process=InterviewProcess(
            rounds=[
                "Initial application screening",
                "Preliminary HR discussion over phone or video call",
                "Online coding assessment or take-home assignment",
                "Technical interview focused on problem-solving and algorithms",
                "System design discussion for senior roles",
                "Cultural fit interview with team members",
            ],
            typical_duration="2-4 weeks",
        ),
        rating="4.1/5",
        pros=[
            "Fast-paced startup environment with growth opportunities",
            "Cutting-edge fintech work experience",
            "Good compensation packages with equity options",
            "Strong engineering culture that values technical excellence",
        ],
        cons=[
            "Can be high pressure with fast-changing priorities",
            "Work-life balance challenges in some teams",
            "Growing pains as the company scales rapidly",
        ],
        benefits=[
            "Health insurance with family coverage",
            "Employee stock ownership plan (ESOP)",
            "Flexible work policies",
            "Learning and development allowance",
        ],
    ),
    "amazon": PartialProfile(
        name="Amazon",
        description=(
            "Amazon.com, Inc. is an American multinational technology company engaged in "
            "e-commerce, cloud computing, online advertising and digital streaming."
        ),
        industry="E-commerce, Cloud Computing",
        founded="1994",
        headquarters="Seattle, Washington, United States",
        employee_count="1,500,000+",
        revenue="$575 billion (2023)",
        website="https://www.amazon.com",
        key_people=["Andy Jassy (CEO)", "Jeff Bezos (Founder)"],
        business_segments=["North America", "International", "Amazon Web Services"],
        technologies=["Cloud Computing", "Machine Learning", "Logistics Automation"],
        products=["Amazon Marketplace", "Kindle", "Echo", "Prime Video"],
        services=["Amazon Web Services", "Amazon Prime", "Fulfillment by Amazon"],
        interview_process=InterviewProcess(
            rounds=[
                "Online assessment",
                "Phone screen",
                "Interview loop with 4-5 interviews including a Bar Raiser",
            ],
            typical_duration="3-6 weeks",
            tips=[
                "Prepare STAR stories mapped to the Leadership Principles",
                "Practice data structures and algorithms",
            ],
            common_questions=[
                "Tell me about a time you disagreed with your manager",
                "Describe a time you took ownership of a problem",
            ],
        ),
    ),
}


# ============================================================
# LOOKUPS
# ============================================================

def find_curated_exact(company_name: str) -> Optional[PartialProfile]:
    """Exact normalized-name hit, used by ensure_complete_data."""
    entry = CURATED_COMPANIES.get(normalize_company_name(company_name))
    return entry.model_copy(deep=True) if entry else None


def find_curated(company_name: str) -> Optional[PartialProfile]:
    """
    Substring match in either direction ("Google India" -> google, "Goog" -> google).
    The reverse direction needs at least 3 characters so that "a" does not
    match every key.
    """
    normalized = normalize_company_name(company_name)
    if not normalized:
        return None

    for key, entry in CURATED_COMPANIES.items():
        if key in normalized or (len(normalized) >= 3 and normalized in key):
            profile = entry.model_copy(deep=True)
            profile.source = ProfileSource.curated
            return profile
    return None
