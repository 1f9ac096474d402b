"""
Platform catalog.
Holds the known streaming platforms and answers id, label, genre and free-text lookups.
Free-text lookups fall back to rapidfuzz when no platform contains the text verbatim.
"""

import re  # key normalization
from typing import Iterable, List, Optional  # type annotations

from rapidfuzz import process, fuzz  # fuzzy matching utilities

from loguru import logger  # console logging

from .models import Platform  # catalog record


# Every platform the aggregator knows about, in display order.
# Order matters: free-text search returns matches in this order and callers take the first.
PLATFORMS: List[Platform] = [
	# ---- BASIC STREAMING ----
	Platform(id="netflix", label="Netflix", kind="streaming", genres=("Basic", "Movies", "Documentaries")),
	Platform(id="hulu", label="Hulu", kind="streaming", genres=("Basic", "Movies")),
	Platform(id="primevideo", label="Prime Video", kind="streaming", genres=("Basic", "Movies")),
	Platform(id="disneyplus", label="Disney+", kind="streaming", genres=("Basic", "Kids")),
	Platform(id="max", label="Max", kind="streaming", genres=("Movies", "Basic")),
	Platform(id="peacock", label="Peacock", kind="streaming", genres=("Basic", "LiveTV")),
	Platform(id="paramountplus", label="Paramount+", kind="streaming", genres=("Basic", "Movies")),
	Platform(id="appletv", label="Apple TV+", kind="streaming", genres=("Basic", "Movies")),
	Platform(id="youtube", label="YouTube", kind="streaming", genres=("Free",)),

	# ---- PREMIUM CHANNELS (add-on brands) ----
	Platform(id="betplus", label="BET+", kind="streaming", genres=("Premium", "Black Media")),
	Platform(id="amcplus", label="AMC+", kind="streaming", genres=("Premium",)),
	Platform(id="starz", label="Starz", kind="streaming", genres=("Premium", "Movies")),
	Platform(id="mgmplus", label="MGM+", kind="streaming", genres=("Premium", "Movies")),

	# ---- MOVIE STREAMING ----
	Platform(id="criterion", label="Criterion Channel", kind="streaming", genres=("Movies", "Arthouse")),
	Platform(id="mubi", label="MUBI", kind="streaming", genres=("Movies", "Arthouse")),
	Platform(id="fandango", label="Fandango at Home", kind="streaming", genres=("Movies",), note="Formerly Vudu"),
	Platform(id="vudu", label="Vudu", kind="streaming", genres=("Movies",), note="Now Fandango at Home"),
	Platform(id="youtubemovies", label="YouTube Movies", kind="streaming", genres=("Movies",)),
	Platform(id="moviesanywhere", label="Movies Anywhere", kind="streaming", genres=("Movies",)),

	# ---- DOCUMENTARIES ----
	Platform(id="pbspassport", label="PBS Passport", kind="streaming", genres=("Documentaries",)),
	Platform(id="curiositystream", label="CuriosityStream", kind="streaming", genres=("Documentaries",)),
	Platform(id="magellantv", label="MagellanTV", kind="streaming", genres=("Documentaries",)),

	# ---- ANIME / ASIAN CINEMA ----
	Platform(id="crunchyroll", label="Crunchyroll", kind="streaming", genres=("Anime & AsianTV",)),
	Platform(id="hidive", label="HIDIVE", kind="streaming", genres=("Anime & AsianTV",)),
	Platform(id="viki", label="Viki", kind="streaming", genres=("Anime & AsianTV",)),
	Platform(id="iqiyi", label="iQIYI", kind="streaming", genres=("Anime & AsianTV",)),
	Platform(id="asiancrush", label="AsianCrush", kind="streaming", genres=("Anime & AsianTV",)),

	# ---- KIDS ----
	Platform(id="disneyplus-kids", label="Disney Jr.", kind="kids", genres=("Kids",), note="Disney, Pixar, Marvel content + live TV"),
	Platform(id="pbskids", label="PBS KIDS", kind="kids", genres=("Kids",), note="Educational, commercial-free"),
	Platform(id="youtubekids", label="YouTube Kids", kind="kids", genres=("Kids",), note="Curated, kid-friendly"),
	Platform(id="noggin", label="Noggin", kind="kids", genres=("Kids",), note="PAW Patrol, Peppa Pig"),
	Platform(id="cartoonnetwork", label="Cartoon Network", kind="kids", genres=("Kids",)),
	Platform(id="nickelodeon", label="Nickelodeon", kind="kids", genres=("Kids",)),
	Platform(id="kidoodletv", label="Kidoodle.TV", kind="kids", genres=("Kids",), note="Safe, curated"),
	Platform(id="happykids", label="HappyKids", kind="kids", genres=("Kids", "Free"), note="Free, wide-ranging"),
	Platform(id="boomerang", label="Boomerang", kind="kids", genres=("Kids",), note="Classic cartoons"),
	Platform(id="babytv", label="BabyTV", kind="kids", genres=("Kids",), note="Toddlers & babies"),
	Platform(id="sensical", label="Sensical", kind="kids", genres=("Kids", "Free"), note="Expert-vetted, free"),
	Platform(id="gonoodle", label="GoNoodle", kind="kids", genres=("Kids", "Free"), note="Active, educational"),
	Platform(id="supersimple", label="Super Simple", kind="kids", genres=("Kids", "Free"), note="Songs & learning"),
	Platform(id="ryanfriends", label="Ryan and Friends", kind="kids", genres=("Kids",), note="Kid influencer content"),
	Platform(id="bbc-cbeebies", label="BBC iPlayer", kind="kids", genres=("Kids",), note="UK children's programming"),
	Platform(id="numberblocks", label="Numberblocks", kind="kids", genres=("Kids",), note="Math & phonics"),
	Platform(id="babyjohn", label="Baby John / Nursery Rhymes", kind="kids", genres=("Kids",), note="Songs & learning"),
	Platform(id="kartoon", label="Kartoon Channel", kind="kids", genres=("Kids",)),

	# ---- LIVE TV ----
	Platform(id="youtubetv", label="YouTube TV", kind="livetv", genres=("LiveTV",)),
	Platform(id="hulu-livetv", label="Hulu + Live TV", kind="livetv", genres=("LiveTV",)),
	Platform(id="sling", label="Sling TV", kind="livetv", genres=("LiveTV",)),
	Platform(id="fubotv", label="Fubo", kind="livetv", genres=("LiveTV", "Sports")),

	# ---- PREMIUM SPORTS STREAMING ----
	Platform(id="espn", label="ESPN", kind="sports", genres=("Sports",)),
	Platform(id="espnplus", label="ESPN+", kind="sports", genres=("Sports",)),
	Platform(id="foxsports1", label="FOX Sports", kind="sports", genres=("Sports",)),
	Platform(id="dazn", label="DAZN", kind="sports", genres=("Sports",)),
	Platform(id="nflplus", label="NFL+", kind="sports", genres=("Sports",)),
	Platform(id="nbaleaguepass", label="NBA League Pass", kind="sports", genres=("Sports",)),
	Platform(id="mlbtv", label="MLB.TV", kind="sports", genres=("Sports",)),
	Platform(id="nhl", label="NHL+", kind="sports", genres=("Sports",)),
	Platform(id="hbcugosports", label="HBCUGO Sports", kind="sports", genres=("Sports", "Black Media")),
	Platform(id="yahoosports", label="Yahoo Sports Network", kind="sports", genres=("Sports",)),
	Platform(id="fanduelsports", label="FanDuel Sports Network", kind="sports", genres=("Sports",)),

	# ---- REGIONAL SPORTS NETWORKS (Team-specific streaming) ----
	Platform(id="yesnetwork", label="YES Network", kind="sports", genres=("Sports",), note="NY Yankees, Brooklyn Nets"),
	Platform(id="nesn", label="NESN", kind="sports", genres=("Sports",), note="Boston Red Sox, Boston Bruins"),
	Platform(id="snla", label="SportsNet LA", kind="sports", genres=("Sports",), note="LA Dodgers"),
	Platform(id="masn", label="MASN", kind="sports", genres=("Sports",), note="Baltimore Orioles, Washington Nationals"),
	Platform(id="marquee", label="Marquee Sports Network", kind="sports", genres=("Sports",), note="Chicago Cubs"),
	Platform(id="sny", label="SNY", kind="sports", genres=("Sports",), note="NY Mets"),
	Platform(id="attsportsnet", label="AT&T SportsNet", kind="sports", genres=("Sports",), note="Pittsburgh Pirates, Houston Astros, Rocky Mountain region"),
	Platform(id="nbcsportsboston", label="NBC Sports Boston", kind="sports", genres=("Sports",), note="Boston Celtics, Bruins regional"),
	Platform(id="msgnetwork", label="MSG Network", kind="sports", genres=("Sports",), note="NY Knicks, NY Rangers, NJ Devils"),
	Platform(id="ballysports", label="Bally Sports", kind="sports", genres=("Sports",), note="Multiple RSNs across regions"),
	Platform(id="rootsports", label="ROOT Sports", kind="sports", genres=("Sports",), note="Seattle Mariners, Pittsburgh, AT&T Rocky Mountain"),
	Platform(id="spectrumsnets", label="Spectrum SportsNet", kind="sports", genres=("Sports",), note="LA Lakers, LA Galaxy"),
	Platform(id="nbcsportschicago", label="NBC Sports Chicago", kind="sports", genres=("Sports",), note="Chicago White Sox, Bulls, Blackhawks"),
	Platform(id="nbcsportsphilly", label="NBC Sports Philadelphia", kind="sports", genres=("Sports",), note="Philadelphia 76ers, Phillies, Flyers"),
	Platform(id="nbcsnw", label="NBC Sports Northwest", kind="sports", genres=("Sports",), note="Portland Trail Blazers"),
	Platform(id="kcsr", label="KC Sports Network", kind="sports", genres=("Sports",), note="Kansas City Royals, Sporting KC"),
	Platform(id="monumental", label="Monumental Sports Network", kind="sports", genres=("Sports",), note="Washington Wizards, Capitals"),

	# ---- GAMING ----
	Platform(id="twitch", label="Twitch", kind="gaming", genres=("Gaming",)),
	Platform(id="kick", label="Kick", kind="gaming", genres=("Gaming",)),
	Platform(id="xboxcloud", label="XBOX Cloud", kind="gaming", genres=("Gaming",)),
	Platform(id="geforcenow", label="GeForce NOW", kind="gaming", genres=("Gaming",)),
	Platform(id="playstationplus", label="PlayStation Plus", kind="gaming", genres=("Gaming",)),
	Platform(id="steam", label="Steam", kind="gaming", genres=("Gaming",)),

	# ---- FREE STREAMING ----
	Platform(id="tubi", label="Tubi", kind="streaming", genres=("Free",)),
	Platform(id="plutotv", label="Pluto TV", kind="streaming", genres=("Free",)),
	Platform(id="rokuchannel", label="Roku Channel", kind="streaming", genres=("Free",)),
	Platform(id="freevee", label="Amazon Freevee", kind="streaming", genres=("Free",)),
	Platform(id="xumo", label="Xumo Play", kind="streaming", genres=("Free",)),
	Platform(id="plex", label="Plex", kind="streaming", genres=("Free",)),
	Platform(id="crackle", label="Crackle", kind="streaming", genres=("Free",)),
	Platform(id="revry", label="Revry", kind="streaming", genres=("Free", "LGBT")),

	# ---- INDIE AND ARTHOUSE FILM ----
	Platform(id="ovid", label="OVID.tv", kind="niche", genres=("Arthouse",)),
	Platform(id="fandor", label="Fandor", kind="niche", genres=("Arthouse",)),
	Platform(id="kinocult", label="Kino Cult", kind="niche", genres=("Arthouse",)),
	Platform(id="kanopy", label="Kanopy", kind="niche", genres=("Arthouse", "Documentaries")),

	# ---- HORROR / CULT ----
	Platform(id="shudder", label="Shudder", kind="niche", genres=("Horror / Cult",)),
	Platform(id="screambox", label="Screambox", kind="niche", genres=("Horror / Cult",)),
	Platform(id="arrow", label="Arrow Player", kind="niche", genres=("Horror / Cult",)),

	# ---- LGBT ----
	Platform(id="heretv", label="HERE TV", kind="niche", genres=("LGBT",)),
	Platform(id="outtv", label="OUTtv", kind="niche", genres=("LGBT",)),
	Platform(id="dekkoo", label="Dekkoo", kind="niche", genres=("LGBT",)),

	# ---- VISTAZO (LATINO / SPANISH-LANGUAGE) ----
	Platform(id="vixpremium", label="ViX Premium", kind="streaming", genres=("Vistazo",), note="TelevisaUnivision streaming"),
	Platform(id="fubolatino", label="Fubo Latino", kind="livetv", genres=("Vistazo", "Sports", "LiveTV"), note="Spanish-language live TV & sports"),
	Platform(id="telemundodeportes", label="Telemundo Deportes Ahora", kind="sports", genres=("Vistazo", "Sports"), note="NBC/Telemundo sports"),
	Platform(id="slinglatino", label="Sling Latino", kind="livetv", genres=("Vistazo", "LiveTV"), note="Spanish-language Sling packages"),
	Platform(id="espndeportes", label="ESPN Deportes", kind="sports", genres=("Vistazo", "Sports"), note="ESPN en espa\u00f1ol"),
	Platform(id="directvdeportes", label="DIRECTV Deportes", kind="sports", genres=("Vistazo", "Sports"), note="Latin American sports"),
	Platform(id="xfinitynowlatino", label="Xfinity/NOW TV Latino", kind="livetv", genres=("Vistazo", "LiveTV"), note="Comcast Spanish-language tier"),
	Platform(id="univision", label="Univision", kind="streaming", genres=("Vistazo",), note="Spanish-language broadcast"),
	Platform(id="telemundo", label="Telemundo", kind="streaming", genres=("Vistazo",), note="NBC Spanish-language network"),
	Platform(id="estrella", label="Estrella TV", kind="streaming", genres=("Vistazo",), note="Mexican entertainment"),
	Platform(id="cinelatinotv", label="Cinelatino", kind="streaming", genres=("Vistazo", "Movies"), note="Latin American films"),
	Platform(id="pantaya", label="Pantaya", kind="streaming", genres=("Vistazo", "Movies"), note="Spanish-language movies"),

	# ---- BLACK CULTURE & DIASPORA ----
	Platform(id="kwelitv", label="KweliTV", kind="niche", genres=("Black Media",)),
	Platform(id="hbcugo", label="HBCUGO", kind="niche", genres=("Black Media",)),
	Platform(id="brownsugar", label="Brown Sugar", kind="niche", genres=("Black Media",)),
	Platform(id="americanu", label="America Nu", kind="niche", genres=("Black Media",)),
	Platform(id="afrolandtv", label="AfroLandTV", kind="niche", genres=("Black Media",)),
	Platform(id="urbanflixtv", label="UrbanFlixTV", kind="niche", genres=("Black Media",)),
	Platform(id="blackstarnetwork", label="Black Star Network", kind="niche", genres=("Black Media",)),
	Platform(id="umc", label="UMC (Urban Movie Channel)", kind="niche", genres=("Black Media",)),
	Platform(id="allblk", label="ALLBLK", kind="niche", genres=("Black Media",)),
	Platform(id="mansa", label="MANSA", kind="niche", genres=("Black Media",)),

]


_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_key(s: str) -> str:
	"""Lowercase and drop everything outside [a-z0-9]."""
	return _NON_ALNUM.sub("", (s or "").lower())


class PlatformCatalog:
	"""
	Read-only lookups over a list of platforms.
	The search engine uses it for display labels; the intent parser uses it to resolve spoken platform names.
	"""

	def __init__(self, platforms: Optional[Iterable[Platform]] = None, fuzzy_cutoff: float = 85.0):
		self._platforms: List[Platform] = list(PLATFORMS if platforms is None else platforms)
		self._by_id = {p.id: p for p in self._platforms}
		# Lowercased labels for fuzzy search; index aligns with self._platforms
		self._labels = [p.label.lower() for p in self._platforms]
		self.fuzzy_cutoff = fuzzy_cutoff
		logger.debug(f"[Catalog] Initialized with {len(self._platforms)} platforms")

	def __len__(self) -> int:
		return len(self._platforms)

	@property
	def platforms(self) -> List[Platform]:
		return list(self._platforms)

	@property
	def all_ids(self) -> List[str]:
		return [p.id for p in self._platforms]

	def platform_by_id(self, platform_id: str) -> Optional[Platform]:
		return self._by_id.get(platform_id)

	def label_for(self, platform_id: str) -> str:
		"""Display label for an id, or the raw id when the catalog does not know it."""
		platform = self._by_id.get(platform_id)
		return platform.label if platform else platform_id

	def platform_id_from_label(self, label: str) -> Optional[str]:
		lower = (label or "").strip().lower()
		for p in self._platforms:
			if p.label.lower() == lower or p.id.lower() == lower:
				return p.id
		return None

	def platforms_for_genre(self, genre: str) -> List[str]:
		if genre == "All":
			return self.all_ids
		return [p.id for p in self._platforms if genre in p.genres]

	def search_platforms(self, text: str) -> List[Platform]:
		"""
		Best-effort free-text platform lookup, best match first.
		Substring hits on label, id or note win, in catalog order.
		Otherwise the closest label above the fuzzy cutoff is returned on its own.
		Blank text matches nothing.
		"""
		q = (text or "").strip().lower()
		if not q:
			return []

		hits = [
			p for p in self._platforms
			if q in p.label.lower() or q in p.id.lower() or (p.note is not None and q in p.note.lower())
		]
		if hits:
			logger.debug(f"[Catalog] '{q}' matched {len(hits)} platforms by substring; first={hits[0].id}")
			return hits

		best = process.extractOne(q, self._labels, scorer=fuzz.ratio, score_cutoff=self.fuzzy_cutoff)
		if best is None:
			logger.debug(f"[Catalog] '{q}' matched no platform")
			return []
		label, score, idx = best
		logger.debug(f"[Catalog] '{q}' fuzzy matched '{label}' (score={score:.1f})")
		return [self._platforms[idx]]
