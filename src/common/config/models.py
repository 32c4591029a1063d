from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class PersistenceConfig:
    type: str = "file"  # memory, file, sql
    key: str = "historicalIncidents"
    output_dir: str = "data/knowledge_base"
    database_url: Optional[str] = None  # DATABASE_URL wins when set

@dataclass
class LookupConfig:
    weather_provider: str = "simulated"  # simulated, static, openweathermap
    static_weather: str = "clear"
    event_provider: str = "simulated"  # simulated, static
    static_events: bool = False
    event_probability: float = 0.1
    timeout_seconds: float = 2.0
    openweathermap_url: str = "https://api.openweathermap.org/data/2.5/weather"

@dataclass
class LearningConfig:
    enabled: bool = True
    interval_seconds: float = 3600.0
    materialize_probability: float = 0.3
    feed: str = "simulated"  # simulated, static

@dataclass
class CalendarConfig:
    timezone: str = "Europe/Amsterdam"
    holidays: List[str] = field(default_factory=list)  # ISO dates

@dataclass
class SeedingConfig:
    days: int = 90
    max_incidents_per_day: int = 3
    seed: Optional[int] = None

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000

@dataclass
class EngineConfig:
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    lookups: LookupConfig = field(default_factory=LookupConfig)
    learning: LearningConfig = field(default_factory=LearningConfig)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    seeding: SeedingConfig = field(default_factory=SeedingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    route_separator: str = " - "
