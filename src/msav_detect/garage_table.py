"""Embedded garage catalog.

Used when no catalog file is found or none of them parse. Rows are
(code, model, shadow, display name, race mask, freeride mask).
"""

# Freeride modes a car is offered in
FR_CITY = 0x01
FR_COUNTRY = 0x02
FR_EXTREME = 0x04
FR_ALL = FR_CITY | FR_COUNTRY | FR_EXTREME

# Racing classes
RACE_NONE = 0x00
RACE_C = 0x01
RACE_B = 0x02
RACE_A = 0x04
RACE_SPECIAL = 0x08


def _car(code: str, name: str, race: int, freeride: int) -> tuple:
    return (code, f"{code}.i3d", f"{code}_sh.i3d", name, race, freeride)


EMBEDDED_CARS = (
    _car("bolt_ace_tudor", "Bolt Ace Tudor", RACE_C, FR_ALL),
    _car("bolt_ace_fordor", "Bolt Ace Fordor", RACE_C, FR_ALL),
    _car("bolt_ace_runabout", "Bolt Ace Runabout", RACE_C, FR_ALL),
    _car("bolt_ace_pickup", "Bolt Ace Pickup", RACE_NONE, FR_CITY | FR_COUNTRY),
    _car("bolt_ace_touring", "Bolt Ace Touring", RACE_C, FR_ALL),
    _car("bolt_ace_coupe", "Bolt Ace Coupe", RACE_C, FR_ALL),
    _car("bolt_b_cabriolet", "Bolt Model B Cabriolet", RACE_C, FR_ALL),
    _car("bolt_b_coupe", "Bolt Model B Coupe", RACE_C, FR_ALL),
    _car("bolt_b_delivery", "Bolt Model B Delivery", RACE_NONE, FR_CITY | FR_COUNTRY),
    _car("bolt_b_fordor", "Bolt Model B Fordor", RACE_C, FR_ALL),
    _car("bolt_b_roadster", "Bolt Model B Roadster", RACE_C, FR_ALL),
    _car("bolt_b_tudor", "Bolt Model B Tudor", RACE_C, FR_ALL),
    _car("bolt_pickup", "Bolt Pickup", RACE_NONE, FR_CITY | FR_COUNTRY),
    _car("bolt_v8_coupe", "Bolt V8 Coupe", RACE_B, FR_ALL),
    _car("bolt_v8_fordor", "Bolt V8 Fordor", RACE_B, FR_ALL),
    _car("bolt_v8_roadster", "Bolt V8 Roadster", RACE_B, FR_ALL),
    _car("bolt_v8_touring", "Bolt V8 Touring", RACE_B, FR_ALL),
    _car("bolt_v8_tudor", "Bolt V8 Tudor", RACE_B, FR_ALL),
    _car("bolt_truck", "Bolt Truck", RACE_NONE, FR_CITY | FR_COUNTRY),
    _car("bolt_ambulance", "Bolt Ambulance", RACE_NONE, FR_CITY),
    _car("bolt_hearse", "Bolt Hearse", RACE_NONE, FR_CITY),
    _car("bolt_police", "Bolt Police", RACE_NONE, FR_CITY | FR_EXTREME),
    _car("brubaker_4wd", "Brubaker 4WD", RACE_SPECIAL, FR_EXTREME),
    _car("celeste_marque500", "Celeste Marque 500", RACE_A, FR_ALL),
    _car("crusader_forte", "Crusader Chromium Forte", RACE_B, FR_ALL),
    _car("crusader_fordor", "Crusader Chromium Fordor", RACE_B, FR_ALL),
    _car("crusader_police", "Crusader Police", RACE_NONE, FR_CITY | FR_EXTREME),
    _car("falconer_classic", "Falconer Classic", RACE_B, FR_ALL),
    _car("falconer_gangster", "Falconer Gangster", RACE_B, FR_ALL),
    _car("falconer_yellowhammer", "Falconer Yellowhammer", RACE_B, FR_ALL),
    _car("guardian_coupe", "Guardian Terraplane Coupe", RACE_B, FR_ALL),
    _car("guardian_fordor", "Guardian Terraplane Fordor", RACE_B, FR_ALL),
    _car("guardian_tudor", "Guardian Terraplane Tudor", RACE_B, FR_ALL),
    _car("houston_wasp_coupe", "Houston Wasp Coupe", RACE_C, FR_ALL),
    _car("houston_wasp_roadster", "Houston Wasp Roadster", RACE_C, FR_ALL),
    _car("houston_wasp_pickup", "Houston Wasp Pickup", RACE_NONE, FR_CITY | FR_COUNTRY),
    _car("lassiter_appolyon", "Lassiter V16 Appolyon", RACE_A, FR_ALL),
    _car("lassiter_charleston", "Lassiter V16 Charleston", RACE_A, FR_ALL),
    _car("lassiter_fordor", "Lassiter V16 Fordor", RACE_A, FR_ALL),
    _car("lassiter_phaeton", "Lassiter V16 Phaeton", RACE_A, FR_ALL),
    _car("lassiter_roadster", "Lassiter V16 Roadster", RACE_A, FR_ALL),
    _car("lassiter_police", "Lassiter Police", RACE_NONE, FR_CITY | FR_EXTREME),
    _car("schubert_six_fordor", "Schubert Six Fordor", RACE_C, FR_ALL),
    _car("schubert_six_tudor", "Schubert Six Tudor", RACE_C, FR_ALL),
    _car("schubert_extra_fordor", "Schubert Extra Six Fordor", RACE_B, FR_ALL),
    _car("schubert_extra_tudor", "Schubert Extra Six Tudor", RACE_B, FR_ALL),
    _car("schubert_police", "Schubert Six Police", RACE_NONE, FR_CITY | FR_EXTREME),
    _car("schubert_taxi", "Schubert Six Taxi", RACE_NONE, FR_CITY),
    _car("silver_fletcher", "Silver Fletcher", RACE_A, FR_ALL),
    _car("thor_cabriolet", "Thor 810 Cabriolet", RACE_A, FR_ALL),
    _car("thor_phaeton", "Thor 810 Phaeton", RACE_A, FR_ALL),
    _car("thor_sedan", "Thor 810 Sedan", RACE_A, FR_ALL),
    _car("trautenberg_j", "Trautenberg Model J", RACE_A, FR_ALL),
    _car("trautenberg_racer", "Trautenberg Racer 4WD", RACE_SPECIAL, FR_EXTREME),
    _car("ulver_air_fordor", "Ulver Airstream Fordor", RACE_B, FR_ALL),
    _car("ulver_air_tudor", "Ulver Airstream Tudor", RACE_B, FR_ALL),
    _car("wright_coupe", "Wright Coupe", RACE_C, FR_ALL),
    _car("wright_fordor", "Wright Fordor", RACE_C, FR_ALL),
    _car("black_dragon", "Black Dragon 4WD", RACE_SPECIAL, FR_EXTREME),
    _car("flamer", "Flamer", RACE_SPECIAL, FR_EXTREME),
    _car("hot_rod", "Hot Rod", RACE_SPECIAL, FR_EXTREME),
    _car("manta_prototype", "Manta Prototype", RACE_SPECIAL, FR_EXTREME),
    _car("manta_taxi", "Manta Taxi", RACE_SPECIAL, FR_EXTREME),
    _car("scorpion", "Scorpion", RACE_SPECIAL, FR_EXTREME),
    _car("bob_mylan", "Bob Mylan", RACE_SPECIAL, FR_EXTREME),
    _car("disorder", "Disorder", RACE_SPECIAL, FR_EXTREME),
    _car("bulldozer", "Bulldozer", RACE_NONE, FR_EXTREME),
    _car("hillbilly", "Hillbilly", RACE_NONE, FR_EXTREME),
    _car("bus", "City Bus", RACE_NONE, FR_CITY | FR_EXTREME),
    _car("tractor", "Farm Tractor", RACE_NONE, FR_COUNTRY | FR_EXTREME),
    _car("fire_truck", "Fire Truck", RACE_NONE, FR_CITY),
    _car("milk_truck", "Milk Truck", RACE_NONE, FR_CITY | FR_COUNTRY),
    _car("racer_bolt", "Bolt Racer", RACE_C | RACE_SPECIAL, FR_EXTREME),
    _car("racer_crusader", "Crusader Racer", RACE_B | RACE_SPECIAL, FR_EXTREME),
    _car("racer_falconer", "Falconer Racer", RACE_B | RACE_SPECIAL, FR_EXTREME),
    _car("racer_lassiter", "Lassiter Racer", RACE_A | RACE_SPECIAL, FR_EXTREME),
    _car("racer_schubert", "Schubert Racer", RACE_C | RACE_SPECIAL, FR_EXTREME),
    _car("racer_thor", "Thor Racer", RACE_A | RACE_SPECIAL, FR_EXTREME),
    _car("racer_trautenberg", "Trautenberg Racer", RACE_A | RACE_SPECIAL, FR_EXTREME),
    _car("racer_ulver", "Ulver Racer", RACE_B | RACE_SPECIAL, FR_EXTREME),
)
