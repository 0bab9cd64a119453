# ---- BUNDLED DEFAULTS ----
# Used whenever no override row exists in the database (first run, or a failed read).

DEFAULT_CATEGORIES = [
    {
        "id": "cars",
        "name": "Car Rentals",
        "icon": "Car",
        "href": "/services/cars",
        "image_url": "https://images.unsplash.com/photo-1549317661-bd32c8ce0db2",
        "enabled": True,
    },
    {
        "id": "hotels",
        "name": "Hotels",
        "icon": "Hotel",
        "href": "/services/hotels",
        "image_url": "https://images.unsplash.com/photo-1566073771259-6a8506099945",
        "enabled": True,
    },
    {
        "id": "transport",
        "name": "Transport / Pickup",
        "icon": "Bus",
        "href": "/services/transport",
        "image_url": "https://images.unsplash.com/photo-1544620347-c4fd4a3d5957",
        "enabled": True,
    },
    {
        "id": "explore",
        "name": "Explore Trips",
        "icon": "Compass",
        "href": "/services/explore",
        "image_url": "https://images.unsplash.com/photo-1489493585363-d69421e0edd3",
        "enabled": True,
    },
]

DEFAULT_SETTINGS = {
    "logo_url": "",
    "whatsapp_number": "",
    "booking_email_to": "",
    "resend_email_from": "TriPlanner <onboarding@resend.dev>",
    "hero_background_image_url": "https://images.unsplash.com/photo-1539020140153-e479b8c22e70",
    "suggestions_background_image_url": "https://images.unsplash.com/photo-1469854523086-cc02fe5d8800",
    "category_images": {c["id"]: c["image_url"] for c in DEFAULT_CATEGORIES},
    "categories": DEFAULT_CATEGORIES,
}

DEFAULT_ADMIN_EMAIL_TEMPLATE = (
    "<h3>New Booking Inquiry for {{serviceName}}</h3>\n"
    "<p><strong>Name:</strong> {{name}}</p>\n"
    "<p><strong>Email:</strong> {{email}}</p>\n"
    "{{details}}"
)

DEFAULT_CLIENT_EMAIL_TEMPLATE = (
    "<h3>Confirmation for {{serviceName}}</h3>"
    "<p>Hi {{name}},</p>"
    "<p>We have received your inquiry and will get back to you soon.</p>"
)

DEFAULT_EMAIL_TEMPLATES = {
    "admin": DEFAULT_ADMIN_EMAIL_TEMPLATE,
    "client": DEFAULT_CLIENT_EMAIL_TEMPLATE,
}

# Suggested keys for the free-form details map, per category (admin editor hints)
DETAIL_KEY_SUGGESTIONS = {
    "cars": ["Seats", "Transmission", "Fuel Policy", "Type"],
    "hotels": ["Rating", "Amenities", "Room Type"],
    "transport": ["Max Passengers", "Luggage", "Schedule", "Vehicle"],
    "explore": ["Duration", "Includes", "Meeting Point"],
}

AIRPORTS = [
    "Casablanca Mohammed V Airport (CMN)",
    "Marrakech Menara Airport (RAK)",
    "Rabat Sale Airport (RBA)",
    "Agadir Al Massira Airport (AGA)",
    "Fes Saiss Airport (FEZ)",
]

MOROCCAN_CITIES = [
    "Casablanca",
    "Rabat",
    "Marrakech",
    "Fes",
    "Agadir",
    "Tangier",
    "Essaouira",
]

SEED_SERVICES = [
    {
        "category": "cars",
        "name": "City Compact",
        "description": "A nimble compact car, perfect for city streets and easy parking.",
        "price": "45",
        "price_unit": "day",
        "location": "Downtown",
        "image_url": "https://images.unsplash.com/photo-1549317661-bd32c8ce0db2",
        "details": {"Seats": "4", "Transmission": "Automatic", "Fuel Policy": "Full to full"},
    },
    {
        "category": "cars",
        "name": "Adventure SUV",
        "description": "Spacious SUV built for mountain roads and family road trips.",
        "price": "80",
        "price_unit": "day",
        "location": "Airport",
        "image_url": "https://images.unsplash.com/photo-1519641471654-76ce0107ad1b",
        "details": {"Seats": "5", "Transmission": "Automatic", "Fuel Policy": "Full to full"},
        "is_best_offer": True,
    },
    {
        "category": "cars",
        "name": "Eco-Friendly Sedan",
        "description": "Quiet electric sedan with plenty of range for intercity drives.",
        "price": "60",
        "price_unit": "day",
        "location": "City Center",
        "image_url": "https://images.unsplash.com/photo-1560958089-b8a1929cea89",
        "details": {"Seats": "5", "Transmission": "Automatic", "Type": "Electric"},
    },
    {
        "category": "hotels",
        "name": "The Grand View Hotel",
        "description": "Seaside luxury with panoramic views, a spa and an infinity pool.",
        "price": "250",
        "price_unit": "night",
        "location": "Seaside",
        "image_url": "https://images.unsplash.com/photo-1566073771259-6a8506099945",
        "details": {"Rating": "5 stars", "Amenities": "Pool, Spa, Free WiFi", "Room Type": "Deluxe King"},
        "is_best_offer": True,
    },
    {
        "category": "hotels",
        "name": "The Backpacker Nook",
        "description": "Friendly hostel in the heart of the old town.",
        "price": "40",
        "price_unit": "night",
        "location": "Old Town",
        "image_url": "https://images.unsplash.com/photo-1555854877-bab0e564b8d5",
        "details": {"Rating": "4 stars", "Amenities": "Shared Kitchen, Lockers, WiFi", "Room Type": "8-Bed Dorm"},
    },
    {
        "category": "hotels",
        "name": "Metropolis Business Inn",
        "description": "Business hotel steps away from the financial district.",
        "price": "150",
        "price_unit": "night",
        "location": "Financial District",
        "image_url": "https://images.unsplash.com/photo-1551882547-ff40c63fe5fa",
        "details": {"Rating": "4 stars", "Amenities": "Gym, Conference Rooms, Restaurant", "Room Type": "Standard Queen"},
    },
    {
        "category": "transport",
        "name": "Airport Express Shuttle",
        "description": "Shared shuttle between the airport and downtown.",
        "price": "25",
        "price_unit": "trip",
        "location": "Airport to Downtown",
        "image_url": "https://images.unsplash.com/photo-1544620347-c4fd4a3d5957",
        "details": {"Max Passengers": "12", "Luggage": "1 per person", "Schedule": "Every 30 mins"},
    },
    {
        "category": "transport",
        "name": "InterCity High-Speed Rail",
        "description": "First class rail tickets between the major cities.",
        "price": "75",
        "price_unit": "trip",
        "location": "Central Station",
        "image_url": "https://images.unsplash.com/photo-1474487548417-781cb71495f3",
        "details": {"Class": "First Class", "Amenities": "WiFi, Power Outlets, Cafe Car", "Duration": "2 hours"},
    },
    {
        "category": "transport",
        "name": "Executive Chauffeur",
        "description": "Private chauffeur in a luxury sedan, point to point.",
        "price": "120",
        "price_unit": "trip",
        "location": "City-wide",
        "image_url": "https://images.unsplash.com/photo-1449965408869-eaa3f722e40d",
        "details": {"Vehicle": "Luxury Sedan", "Service": "Point-to-point", "Includes": "Water, Mints"},
        "is_best_offer": True,
    },
]
