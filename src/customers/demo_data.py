"""Sample customers loaded at startup when SEED_DEMO_CUSTOMERS is enabled."""

DEMO_CUSTOMERS = [
    {"first": "Eric", "name": "Meyer", "contacts": "eric98@yahoo.com; (030) 3945-642298"},
    {"first": "Anne", "name": "Bayer", "contacts": "anne24@yahoo.de; (030) 3481-23352; fax: (030)23451356"},
    {"first": "Tim", "name": "Schulz-Mueller", "contacts": "tim2346@gmx.de"},
    {"first": "Nadine", "name": "Blumenfeld", "contacts": "+49 152-92454"},
    {"first": "Khaled", "name": "Saad Mohamed Abdelalim", "contacts": "+49 1524-12948210"},
]
