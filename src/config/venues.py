"""Built-in Bergen venue table: venue display name -> the venue's own website.

Loaded once per process by ``src.core.venue_registry.load_venue_registry``
when no ``VENUE_REGISTRY_PATH`` file is configured. Keys are matched after
case folding and accent stripping, so "Røkeriet" and "rokeriet" are the
same entry. Matching is exact: add an alias line rather than relying on
substrings.
"""

VENUE_URLS: dict[str, str] = {
    # Major concert/performance venues
    "Ole Bull Scene": "https://olebullhuset.no",
    "Ole Bull Huset": "https://olebullhuset.no",
    "Lille Ole Bull": "https://olebullhuset.no",
    "Det Vestnorske Teateret": "https://dfrtvest.no",
    "DNS": "https://dns.no",
    "Den Nationale Scene": "https://dns.no",
    "Forum Scene": "https://forumscene.no",
    "Grieghallen": "https://grieghallen.no",

    # USF complex
    "USF Verftet": "https://usf.no",
    "USF": "https://usf.no",
    "Sardinen": "https://usf.no",
    "Sardinen USF": "https://usf.no",
    "Studio USF": "https://usf.no",
    "Røkeriet USF": "https://usf.no",
    "Røkeriet": "https://usf.no",

    # Smaller venues
    "Madam Felle": "https://madamfelle.no",
    "Cornerteateret": "https://cornerteateret.no",
    "Cornerhagen": "https://cornerteateret.no",
    "Hulen": "https://hulen.no",
    "Bergen Kjøtt": "https://bergenkjott.no",
    "Kvarteret": "https://kvarteret.no",
    "Det Akademiske Kvarter": "https://kvarteret.no",
    "Landmark": "https://landmark.no",
    "Victoria": "https://www.victoriapub.no",
    "Vic": "https://www.victoriapub.no",
    "Statsraaden": "https://lehmkuhl.no",
    "Statsraaden Bar": "https://lehmkuhl.no",
    "Statsraaden Bar & Reception": "https://lehmkuhl.no",
    "Statsraad Lehmkuhl": "https://lehmkuhl.no",
    "O'Connor's Irish Pub": "https://oconnors.no/bergen",
    "O'Connor's": "https://oconnors.no/bergen",
    "Oconnors": "https://oconnors.no/bergen",
    "Østre": "https://ekko.no",
    "Østre - hus for lydkunst og elektronisk musikk": "https://ekko.no",

    # Cultural institutions
    "Bergen Kunsthall": "https://bergenkunsthall.no",
    "KODE": "https://kodebergen.no",
    "Permanenten": "https://kodebergen.no",
    "Stenersen": "https://kodebergen.no",
    "Lysverket": "https://kodebergen.no",
    "Rasmus Meyer": "https://kodebergen.no",
    "Troldhaugen": "https://kodebergen.no",
    "Litteraturhuset": "https://litthusbergen.no",
    "Litteraturhuset i Bergen": "https://litthusbergen.no",
    "Cinemateket": "https://cinemateket.no",
    "Cinemateket i Bergen": "https://cinemateket.no",
    "Bergen Domkirke": "https://kirkemusikkibergen.no",
    "BIT Teatergarasjen": "https://bitteater.no",
    "Carte Blanche": "https://carteblanche.no",
    "Bergen Filharmoniske Orkester": "https://harmonien.no",
    "Harmonien": "https://harmonien.no",

    # Libraries
    "Bergen Offentlige Bibliotek": "https://bergenbibliotek.no",
    "Bergen Bibliotek": "https://bergenbibliotek.no",
    "Hovedbiblioteket": "https://bergenbibliotek.no",
    "Åsane Bibliotek": "https://bergenbibliotek.no",
    "Fana Bibliotek": "https://bergenbibliotek.no",
    "Fyllingsdalen Bibliotek": "https://bergenbibliotek.no",
    "Arna Bibliotek": "https://bergenbibliotek.no",
    "Laksevåg Bibliotek": "https://bergenbibliotek.no",
    "Loddefjord Bibliotek": "https://bergenbibliotek.no",
    "Landås Bibliotek": "https://bergenbibliotek.no",
    "Ytre Arna Bibliotek": "https://bergenbibliotek.no",

    # Municipal cultural venues (bergen.kommune.no itself is not an aggregator)
    "Fana Kulturhus": "https://bergen.kommune.no/kulturhus/fana",
    "Åsane Kulturhus": "https://bergen.kommune.no/kulturhus/asane",
    "Laksevåg Kultursenter": "https://bergen.kommune.no/kulturhus/laksevag",
    "Fyllingsdalen Arena": "https://bergen.kommune.no/kulturhus/fyllingsdalen",
    "Fyllingsdalen Teater": "https://fyllingsdalenteater.no",
    "Ny-Krohnborg Kultursenter": "https://bergen.kommune.no/ny-krohnborg",
    "Ny Krohnborg Kultursenter": "https://bergen.kommune.no/ny-krohnborg",
    "Ytrebygda Kultursenter": "https://bergen.kommune.no/ytrebygda-kultursenter",
    "Kulturhuset Sentrum": "https://bergen.kommune.no/kulturhus",
    "Kultursalen Vestkanten": "https://bergen.kommune.no/kulturhus",

    # Family/science
    "Akvariet": "https://akvariet.no",
    "Akvariet i Bergen": "https://akvariet.no",
    "VilVite": "https://vilvite.no",

    # Cinema / film festivals
    "Bergen Kino": "https://bergenkino.no",
    "BIFF": "https://www.biff.no",
    "Bergen Internasjonale Filmfestival": "https://www.biff.no",
    "Bergen Filmklubb": "https://bergenfilmklubb.no",

    # Pride
    "Bergen Pride": "https://bergenpride.no",
    "Regnbuedagene": "https://bergenpride.no",

    # Restaurants/bars with event programs
    "Børskjelleren": "https://borskjelleren.no",
    "Pappa": "https://pappa.no",

    # Student venues
    "Lagshuset": "https://sammen.no/lagshuset",
    "Tivoli": "https://kvarteret.no",

    # Museum Vest
    "Norges Fiskerimuseum": "https://fiskerimuseum.museumvest.no",
    "Fiskerimuseet": "https://fiskerimuseum.museumvest.no",
    "Sandviksboder 23": "https://fiskerimuseum.museumvest.no",
    "Bergens Sjøfartsmuseum": "https://sjofartsmuseum.museumvest.no",
    "Sjøfartsmuseet": "https://sjofartsmuseum.museumvest.no",
    "Det Hanseatiske Museum": "https://hanseatiskemuseum.museumvest.no",
    "Hanseatiske Museum": "https://hanseatiskemuseum.museumvest.no",

    # Bymuseet i Bergen
    "Bymuseet": "https://bymuseet.no",
    "Bymuseet i Bergen": "https://bymuseet.no",
    "Bryggens Museum": "https://bymuseet.no",
    "Gamle Bergen Museum": "https://bymuseet.no",
    "Hordamuseet": "https://bymuseet.no",
    "Lepramuseet": "https://bymuseet.no",
    "Schøtstuene": "https://bymuseet.no",
    "Skolemuseet": "https://bymuseet.no",
    "Damsgård": "https://bymuseet.no",
    "Damsgård Hovedgård": "https://bymuseet.no",
    "Rosenkrantztårnet": "https://bymuseet.no",

    # Historical/outdoor venues
    "Bergenhus Festning": "https://forsvarsbygg.no/festningene/bergenhus-festning",
    "Håkonshallen": "https://forsvarsbygg.no/festningene/bergenhus-festning",
    "Koengen": "https://forsvarsbygg.no/festningene/bergenhus-festning",

    # Kulturhuset i Bergen and its rooms
    "Kulturhuset i Bergen": "https://kulturhusetibergen.no",
    "Kulturhuset i Bergen Hovedsalen": "https://kulturhusetibergen.no",
    "Kulturhuset i Bergen Lillesalen": "https://kulturhusetibergen.no",
    "Kulturhuset i Bergen Restauranten": "https://kulturhusetibergen.no",
    "Kulturhuset i Bergen Galleriet": "https://kulturhusetibergen.no",
    "Kulturhuset i Bergen Mesaninen": "https://kulturhusetibergen.no",
    "Kulturhuset i Bergen Amfi": "https://kulturhusetibergen.no",

    # Other venues
    "Mandelhuset": "https://mandelhuset.no",
    "Stene Matglede": "https://stenematglede.com",
    "Oseana": "https://oseana.no",
    "Studio Bergen": "https://studiobergen.no",
    "Konsertpaleet": "https://konsertpaleet.no",
    "Tekstilindustrimuseet": "https://timuseum.no",
    "Torbjørns Konserthall": "https://torbjornskonserthall.no",
    "Kulturboden": "https://kulturboden.no",
    "Furedalen Alpin": "https://furedalen.no",
    "Fløibanen": "https://floyen.no",
    "Ulriken": "https://ulriken643.no",

    # Address-based keys (some listings use the street address as venue)
    "Nordnesbakken 4": "https://akvariet.no",
    "Thormøhlens gate 51": "https://vilvite.no",
    "Muséplass 3": "https://kfrb.no",
    "Rasmus Meyers allé 5": "https://kfrb.no",
    "Nordahl Bruns gate 9": "https://kodebergen.no",
    "Nordahl Brun gate 9": "https://kodebergen.no",
    "Engen 21": "https://dns.no",
    "Strandgaten 250": "https://usf.no",
    "Olav Kyrres gate 49": "https://bergenbibliotek.no",
    "Strømgaten 6": "https://bergenbibliotek.no",
    "Øvre Ole Bulls plass 6": "https://olebullhuset.no",
    "Bontelabo 2": "https://forsvarsbygg.no/festningene/bergenhus-festning",
    "Åsane senter 52": "https://bergenbibliotek.no",
    "Østre Nesttunvegen 18": "https://bergen.kommune.no/kulturhus/fana",
    "Øvre Nesttunvegen 18": "https://bergen.kommune.no/kulturhus/fana",
    "Nattlandsveien 76A": "https://bergenbibliotek.no",
    "Inndalsveien 28": "https://kvarteret.no",

    # Festivals
    "Bergenfest": "https://bergenfest.no",
    "Festallmenningen": "https://www.fib.no",
    "Festspillene": "https://www.fib.no",
    "Spissen": "https://www.fib.no",
    "Byrommet": "https://varmerevaterevillere.no",

    # Outdoor, sports, creative
    "DNT Bergen": "https://www.dnt.no/dnt-der-du-er/bergen-og-hordaland-turlag/",
    "BEK": "https://bek.no",
    "Bergen senter for elektronisk kunst": "https://bek.no",
    "Brann Stadion": "https://brann.no",
    "SK Brann": "https://brann.no",
    "Nordnes Sjøbad": "https://nordnessjobad.no",
    "ADO Arena": "https://adoarena.no",
    "Paint'n Sip": "https://paintnsip.no",
    "Paintnsip": "https://paintnsip.no",
    "GG Bergen": "https://ggbergen.org",
}
