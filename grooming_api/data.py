# grooming_api/data.py

from decimal import Decimal

# Catalog seeded on first start: (name, duration in minutes, price, description)
SERVICES = [
    ("Bagno e Spazzolatura", 60, Decimal("25.00"), "Bagno completo con shampoo specifico e spazzolatura"),
    ("Taglio Completo", 90, Decimal("40.00"), "Taglio completo del pelo con styling"),
    ("Taglio Unghie", 30, Decimal("15.00"), "Taglio professionale delle unghie"),
    ("Pulizia Orecchie", 20, Decimal("10.00"), "Pulizia accurata delle orecchie"),
    ("Pacchetto Completo", 120, Decimal("60.00"), "Tutti i servizi inclusi"),
]

APPOINTMENT_STATUSES = ("pending", "confirmed", "rejected", "modified")
