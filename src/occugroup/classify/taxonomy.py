"""
Occupation taxonomy for occugroup.

Defines the curated category -> keyword table used by the grouper, and the
immutable Taxonomy object that wraps it. English-only support (EN).
"""

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from ..text import clean_label


# Category definitions: category name -> keywords (synonyms, titles, abbreviations)
# To add a new category, add an entry here with the category name and its keywords
CATEGORY_DEFINITIONS: Dict[str, List[str]] = {
    "doctor": [
        "cardiologist", "neurologist", "ent", "orthopedic", "pediatrician",
        "dermatologist", "psychiatrist", "surgeon", "physician", "doctor",
        "dentist", "orthodontist", "oncologist", "radiologist",
        # Abbreviations
        "dr", "doc", "md", "medical doctor",
    ],
    "software engineer": [
        "developer", "programmer", "software engineer", "coder",
        "frontend developer", "backend developer", "full stack developer",
        "web developer", "mobile developer", "devops engineer",
        "software engineering", "software development", "web development",
        "mobile development", "application development", "coding", "software",
        # Abbreviations
        "dev", "swe", "se",
    ],
    "lawyer": [
        "lawyer", "attorney", "advocate", "solicitor", "barrister",
        "legal counsel", "legal advisor",
        # Abbreviations
        "atty", "esq", "legal",
    ],
    "teacher": [
        "teacher", "professor", "instructor", "educator", "tutor",
        "lecturer", "trainer",
        "prof",
    ],
    "manager": [
        "manager", "director", "executive", "ceo", "cto", "cfo",
        "president", "vp", "vice president", "team lead",
        "mgr", "supervisor", "lead",
    ],
    "designer": [
        "designer", "graphic designer", "ui designer", "ux designer",
        "product designer", "artist", "illustrator",
        "branding", "brand", "visual design", "creative design",
        "ux", "ui", "graphic",
    ],
    "sales professional": [
        "sales", "salesperson", "sales rep", "sales representative",
        "account executive", "business development", "marketing",
        "marketing manager", "brand manager",
        "copywriting", "positioning", "strategy", "insight",
        "ae", "bdm",
    ],
    "accountant": [
        "accountant", "auditor", "financial analyst", "bookkeeper",
        "tax consultant", "chartered accountant", "cpa",
        "ca", "finance",
    ],
    "engineer": [
        "engineer", "mechanical engineer", "civil engineer", "electrical engineer",
        "chemical engineer", "aerospace engineer", "industrial engineer",
        "environmental engineer", "biomedical engineer",
        "eng", "engr",
    ],
    "healthcare professional": [
        "nurse", "pharmacist", "therapist", "physiotherapist",
        "paramedic", "medical assistant", "lab technician",
        "radiographer", "dietitian", "nutritionist",
        "rn", "lpn", "medical staff",
    ],
    "construction worker": [
        "construction worker", "contractor", "builder", "carpenter",
        "electrician", "plumber", "mason", "welder",
        "tradesman",
    ],
    "hospitality professional": [
        "chef", "cook", "waiter", "waitress", "bartender",
        "hotel manager", "receptionist", "concierge",
        "server", "hospitality",
    ],
    "retail professional": [
        "cashier", "store manager", "retail assistant", "sales associate",
        "merchandiser", "stock clerk",
    ],
    "transportation worker": [
        "driver", "truck driver", "delivery driver", "pilot",
        "captain", "logistics coordinator", "dispatcher",
    ],
    "manufacturing worker": [
        "factory worker", "production supervisor", "assembly line worker",
        "quality inspector", "machine operator", "foreman",
    ],
    "public servant": [
        "police officer", "firefighter", "government official",
        "civil servant", "social worker", "public administrator",
    ],
    "media professional": [
        "journalist", "reporter", "editor", "writer", "author",
        "photographer", "videographer", "content creator",
    ],
    "researcher": [
        "scientist", "researcher", "analyst", "data scientist",
        "biologist", "chemist", "physicist", "research assistant",
        "research", "analysis", "data analysis", "scientific research",
    ],
    "hr professional": [
        "hr", "human resources", "recruiter", "talent acquisition",
        "hr manager", "hr specialist", "hiring manager",
        "recruitment", "talent",
    ],
    "security professional": [
        "security", "cybersecurity", "information security", "network security",
        "security analyst", "security engineer", "homeland security",
        "airport security", "screening", "explosive detection",
        "cargo screening", "checkpoint screening", "baggage screening",
    ],
    "technology specialist": [
        "technology", "advanced technology", "innovation", "tech",
        "it specialist", "systems analyst", "network administrator",
        "database administrator", "cloud computing", "ai", "machine learning",
        "computed tomography", "ct scan", "imaging technology",
    ],
    "internet professional": [
        "internet", "internet marketing", "digital marketing", "digital",
        "seo", "sem", "search engine optimization", "search engine marketing",
        "online marketing", "web marketing", "ecommerce", "e-commerce",
        "social media marketing", "content marketing", "email marketing",
        "technicalseo", "technical seo", "digitaltransformation", "digital transformation",
        "marketingautomation", "marketing automation", "crm",
    ],
    "drawings": [
        "drawings", "sketch", "blueprint", "draft", "illustration",
        "diagram",
    ],
    "design": [
        "design",
    ],
}


class Taxonomy:
    """
    Immutable category -> keywords table.

    Keywords are lowercased, trimmed and de-duplicated per category;
    category order and keyword order follow the source mapping.
    """

    def __init__(self, categories: Mapping[str, Iterable[str]], name: str = "custom"):
        """
        Build a taxonomy.

        Args:
            categories: Mapping of category name to keywords
            name: Human-readable taxonomy name

        Raises:
            ValueError: If a category name is empty or a keyword is not a string
        """
        table: Dict[str, Tuple[str, ...]] = {}

        for category, keywords in categories.items():
            if not isinstance(category, str) or not category.strip():
                raise ValueError(f"Invalid category name: {category!r}")

            if isinstance(keywords, str):
                raise ValueError(
                    f"Keywords for category '{category}' must be a list, not a string"
                )

            cleaned_keywords: List[str] = []
            for keyword in keywords:
                if not isinstance(keyword, str):
                    raise ValueError(
                        f"Keyword {keyword!r} in category '{category}' is not a string"
                    )
                cleaned = clean_label(keyword)
                if cleaned and cleaned not in cleaned_keywords:
                    cleaned_keywords.append(cleaned)

            table[category.strip()] = tuple(cleaned_keywords)

        self.name = name
        self._categories = MappingProxyType(table)

    @property
    def categories(self) -> Mapping[str, Tuple[str, ...]]:
        """Read-only view of the category table."""
        return self._categories

    def keywords(self, category: str) -> Tuple[str, ...]:
        """Keywords for one category (empty tuple if unknown)."""
        return self._categories.get(category, ())

    def iter_rules(self) -> Iterator[Tuple[str, str]]:
        """Yield (keyword, category) pairs in declaration order."""
        for category, keywords in self._categories.items():
            for keyword in keywords:
                yield keyword, category

    def to_dict(self) -> Dict[str, List[str]]:
        """Plain-dict copy, suitable for YAML export."""
        return {category: list(keywords) for category, keywords in self._categories.items()}

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, category: object) -> bool:
        return category in self._categories

    def __repr__(self) -> str:
        return f"Taxonomy(name={self.name!r}, categories={len(self)})"


DEFAULT_TAXONOMY = Taxonomy(CATEGORY_DEFINITIONS, name="occupations")
