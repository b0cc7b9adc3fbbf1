"""
Тестовые данные для пустого хранилища
"""

SAMPLE_CARS = [
    {
        "id": 1,
        "name": "Scorpio-N",
        "brand": "Mahindra",
        "price_per_day": 4500,
        "fuel_type": "Diesel",
        "image": "https://images.unsplash.com/photo-1533106497176-45ae19e68ba2?auto=format&fit=crop&q=80&w=800",
        "availability": True,
    },
    {
        "id": 2,
        "name": "Thar Rooftop",
        "brand": "Mahindra",
        "price_per_day": 3500,
        "fuel_type": "Diesel",
        "image": "https://images.unsplash.com/photo-1533473359331-0135ef1b58bf?auto=format&fit=crop&q=80&w=800",
        "availability": True,
    },
    {
        "id": 3,
        "name": "Fortuner Legender",
        "brand": "Toyota",
        "price_per_day": 8500,
        "fuel_type": "Diesel",
        "image": "https://images.unsplash.com/photo-1541899481282-d53bffe3c35d?auto=format&fit=crop&q=80&w=800",
        "availability": True,
    },
]

SAMPLE_USERS = [
    {
        "id": 1,
        "name": "Admin User",
        "email": "admin@driveeasy.com",
        "phone": "9876543210",
        "role": "admin",
        "password": "admin123",
    },
    {
        "id": 2,
        "name": "Test User",
        "email": "user@driveeasy.com",
        "phone": "9876543211",
        "role": "user",
        "password": "user123",
    },
]
