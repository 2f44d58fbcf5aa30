"""
Static part listings served when the pricing site can't be scraped
"""

MOCK_PARTS = {
    "cpu": [
        {"id": "cpu-1", "name": "AMD Ryzen 7 9800X3D", "brand": "AMD", "price": "$479.00", "rating": 4.9,
         "coreCount": 8, "clockSpeed": "4.7 GHz", "boostClock": "5.2 GHz", "architecture": "Zen 5", "tdp": "120 W", "graphics": "Radeon"},
        {"id": "cpu-2", "name": "AMD Ryzen 7 7800X3D", "brand": "AMD", "price": "$369.99", "rating": 4.8,
         "coreCount": 8, "clockSpeed": "4.2 GHz", "boostClock": "5 GHz", "architecture": "Zen 4", "tdp": "120 W", "graphics": "Radeon"},
        {"id": "cpu-3", "name": "Intel Core i5-14600K", "brand": "Intel", "price": "$244.99", "rating": 4.6,
         "coreCount": 14, "clockSpeed": "3.5 GHz", "boostClock": "5.3 GHz", "architecture": "Raptor Lake Refresh", "tdp": "125 W", "graphics": "Intel UHD Graphics 770"},
        {"id": "cpu-4", "name": "AMD Ryzen 5 7600X", "brand": "AMD", "price": "$189.00", "rating": 4.7,
         "coreCount": 6, "clockSpeed": "4.7 GHz", "boostClock": "5.3 GHz", "architecture": "Zen 4", "tdp": "105 W", "graphics": "Radeon"},
    ],
    "cpu-cooler": [
        {"id": "cooler-1", "name": "Thermalright Peerless Assassin 120 SE", "brand": "Thermalright", "price": "$34.90", "rating": 4.8},
        {"id": "cooler-2", "name": "Noctua NH-D15", "brand": "Noctua", "price": "$119.95", "rating": 4.9},
        {"id": "cooler-3", "name": "ARCTIC Liquid Freezer III 360", "brand": "ARCTIC", "price": "$99.99", "rating": 4.7},
    ],
    "motherboard": [
        {"id": "mobo-1", "name": "MSI B650 GAMING PLUS WIFI", "brand": "MSI", "price": "$159.99", "rating": 4.6},
        {"id": "mobo-2", "name": "ASUS ROG STRIX X670E-E GAMING WIFI", "brand": "ASUS", "price": "$399.99", "rating": 4.7},
        {"id": "mobo-3", "name": "Gigabyte Z790 AORUS ELITE AX", "brand": "Gigabyte", "price": "$219.99", "rating": 4.5},
    ],
    "memory": [
        {"id": "mem-1", "name": "Corsair Vengeance RGB 32GB", "brand": "Corsair", "price": "$104.99", "rating": 4.8},
        {"id": "mem-2", "name": "G.Skill Flare X5 32GB", "brand": "G.Skill", "price": "$94.99", "rating": 4.7},
        {"id": "mem-3", "name": "Kingston FURY Beast 16GB", "brand": "Kingston", "price": "$49.99", "rating": 4.6},
    ],
    "internal-hard-drive": [
        {"id": "ssd-1", "name": "Samsung 990 Pro 2TB", "brand": "Samsung", "price": "$169.99", "rating": 4.9},
        {"id": "ssd-2", "name": "Crucial P3 Plus 1TB", "brand": "Crucial", "price": "$64.99", "rating": 4.6},
        {"id": "hdd-1", "name": "Seagate BarraCuda 4TB", "brand": "Seagate", "price": "$79.99", "rating": 4.5},
    ],
    "video-card": [
        {"id": "gpu-1", "name": "NVIDIA GeForce RTX 4090", "brand": "NVIDIA", "price": "$1,799.99", "rating": 4.8},
        {"id": "gpu-2", "name": "AMD Radeon RX 7900 XTX", "brand": "AMD", "price": "$899.99", "rating": 4.7},
        {"id": "gpu-3", "name": "NVIDIA GeForce RTX 4060", "brand": "NVIDIA", "price": "$299.99", "rating": 4.5},
    ],
    "case": [
        {"id": "case-1", "name": "Lian Li O11 Dynamic EVO", "brand": "Lian Li", "price": "$159.99", "rating": 4.8},
        {"id": "case-2", "name": "Fractal Design North", "brand": "Fractal Design", "price": "$139.99", "rating": 4.8},
        {"id": "case-3", "name": "NZXT H5 Flow", "brand": "NZXT", "price": "$89.99", "rating": 4.6},
    ],
    "power-supply": [
        {"id": "psu-1", "name": "Corsair RM850x", "brand": "Corsair", "price": "$129.99", "rating": 4.8},
        {"id": "psu-2", "name": "SeaSonic FOCUS GX-750", "brand": "SeaSonic", "price": "$99.99", "rating": 4.7},
    ],
    "operating-system": [
        {"id": "os-1", "name": "Microsoft Windows 11 Home", "brand": "Microsoft", "price": "$119.99", "rating": 4.3},
        {"id": "os-2", "name": "Microsoft Windows 11 Pro", "brand": "Microsoft", "price": "$159.99", "rating": 4.4},
    ],
    "peripherals": [
        {"id": "per-1", "name": "Logitech G Pro X Superlight 2", "brand": "Logitech", "price": "$159.00", "rating": 4.7},
        {"id": "per-2", "name": "Keychron K2 Pro", "brand": "Keychron", "price": "$99.00", "rating": 4.6},
        {"id": "per-3", "name": "Dell S2721DGF 27\" Monitor", "brand": "Dell", "price": "$279.99", "rating": 4.7},
    ],
    "expansion-card": [
        {"id": "exp-1", "name": "TP-Link Archer TX55E WiFi 6 PCIe", "brand": "TP-Link", "price": "$39.99", "rating": 4.5},
        {"id": "exp-2", "name": "Creative Sound Blaster AE-5 Plus", "brand": "Creative", "price": "$149.99", "rating": 4.4},
    ],
    "accessories": [
        {"id": "acc-1", "name": "Arctic MX-6 Thermal Paste 4g", "brand": "ARCTIC", "price": "$8.99", "rating": 4.8},
        {"id": "acc-2", "name": "Cable Matters Cable Ties 100-Pack", "brand": "Cable Matters", "price": "$7.99", "rating": 4.5},
    ],
}
