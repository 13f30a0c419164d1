"""Pattern tables for signal extraction.

Every table is an ordered tuple of (label, compiled regex) pairs. Tables are
evaluated in order, which matters for experience level and contract type
where the first hit wins. PatternTables bundles them so an extractor can be
built with different tables in tests.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Tuple

from .salary import DEFAULT_SALARY_PATTERNS, SalaryPattern

LabeledPattern = Tuple[str, "re.Pattern[str]"]


def compile_table(entries: Iterable[Tuple[str, str]]) -> Tuple[LabeledPattern, ...]:
    """Compile (label, regex) pairs case-insensitively, preserving order."""
    return tuple((label, re.compile(regex, re.IGNORECASE)) for label, regex in entries)


TECH_PATTERNS = compile_table([
    # Languages
    ("javascript", r"\b(?:javascript|js)\b"),
    ("typescript", r"\b(?:typescript|ts)\b"),
    ("python", r"\bpython\b"),
    ("rust", r"\brust\b"),
    ("go", r"\b(?:golang|go\s+programming|go\s+developer)\b"),
    ("java", r"\bjava\b(?!\s*script)"),
    ("c++", r"(?<![\w+])(?:c\+\+|cpp)(?![\w+])"),
    ("c#", r"(?<![\w#])(?:c#|csharp)(?![\w#])|(?<![\w.])\.net\b"),
    ("ruby", r"\bruby\b"),
    ("php", r"\bphp\b"),
    ("swift", r"\bswift\b"),
    ("kotlin", r"\bkotlin\b"),
    ("scala", r"\bscala\b"),
    ("elixir", r"\belixir\b"),
    ("haskell", r"\bhaskell\b"),
    ("clojure", r"\bclojure\b"),
    ("erlang", r"\berlang\b"),
    ("zig", r"\bzig\b"),
    ("nim", r"\bnim\b"),
    ("ocaml", r"\bocaml\b"),
    ("fsharp", r"(?<![\w#])f#(?![\w#])"),
    ("lua", r"\blua\b"),
    ("perl", r"\bperl\b"),
    ("r", r"\b(?:r\s+programming|r\s+language|rstats)\b"),
    ("julia", r"\bjulia\b"),
    ("dart", r"\bdart\b"),
    ("objectivec", r"\b(?:objective[\s-]?c|objc)\b"),
    ("cobol", r"\bcobol\b"),
    ("fortran", r"\bfortran\b"),
    # Frontend
    ("react", r"\breact(?:\.?js)?\b"),
    ("vue", r"\bvue(?:\.?js)?\b"),
    ("angular", r"\bangular\b"),
    ("svelte", r"\bsvelte\b"),
    ("nextjs", r"\bnext\.?js\b"),
    ("nuxt", r"\bnuxt\b"),
    ("remix", r"\bremix\b"),
    ("astro", r"\bastro\b"),
    ("gatsby", r"\bgatsby\b"),
    ("solidjs", r"\bsolid\.?js\b"),
    ("qwik", r"\bqwik\b"),
    ("htmx", r"\bhtmx\b"),
    ("alpinejs", r"\balpine\.?js\b"),
    ("ember", r"\bember(?:\.?js)?\b"),
    ("backbone", r"\bbackbone(?:\.?js)?\b"),
    ("jquery", r"\bjquery\b"),
    # Backend
    ("nodejs", r"\bnode(?:\.?js)?\b"),
    ("express", r"\bexpress(?:\.?js)?\b"),
    ("fastify", r"\bfastify\b"),
    ("nestjs", r"\bnest\.?js\b"),
    ("hono", r"\bhono\b"),
    ("django", r"\bdjango\b"),
    ("flask", r"\bflask\b"),
    ("fastapi", r"\bfastapi\b"),
    ("rails", r"\brails\b"),
    ("laravel", r"\blaravel\b"),
    ("spring", r"\bspring\s*boot\b|\bspring\s+framework\b"),
    ("aspnet", r"\basp\.?net\b"),
    ("gin", r"\bgin(?:\s+(?:framework|golang)|-gonic)\b"),
    ("fiber", r"\bgo\s*fiber\b|\bfiber\s+(?:framework|go)\b"),
    ("echo", r"\becho\s*(?:go|framework)\b"),
    ("actix", r"\bactix\b"),
    ("axum", r"\baxum\b"),
    ("rocket", r"\brocket(?:\.rs|\s+(?:rust|framework))\b"),
    ("phoenix", r"\bphoenix\s+(?:framework|liveview|elixir)\b"),
    ("sinatra", r"\bsinatra\b"),
    ("koa", r"\bkoa(?:\.?js)?\b"),
    ("hapi", r"\bhapi\b"),
    ("adonisjs", r"\badonis\.?js\b"),
    # Databases
    ("postgresql", r"\b(?:postgres(?:ql)?|psql)\b"),
    ("mysql", r"\bmysql\b"),
    ("mongodb", r"\b(?:mongodb|mongo)\b"),
    ("redis", r"\bredis\b"),
    ("elasticsearch", r"\belasticsearch\b"),
    ("dynamodb", r"\bdynamodb\b"),
    ("sqlite", r"\bsqlite\b"),
    ("supabase", r"\bsupabase\b"),
    ("cassandra", r"\bcassandra\b"),
    ("couchdb", r"\bcouchdb\b"),
    ("neo4j", r"\bneo4j\b"),
    ("mariadb", r"\bmariadb\b"),
    ("oracle", r"\boracle\s*(?:db|database)\b"),
    ("sqlserver", r"\b(?:sql\s*server|mssql)\b"),
    ("cockroachdb", r"\bcockroach\s*db\b"),
    ("planetscale", r"\bplanetscale\b"),
    ("fauna", r"\bfauna\s*db\b"),
    ("firestore", r"\bfirestore\b"),
    ("prisma", r"\bprisma\b"),
    ("drizzle", r"\bdrizzle\s*orm\b"),
    ("typeorm", r"\btypeorm\b"),
    ("sequelize", r"\bsequelize\b"),
    ("knex", r"\bknex\b"),
    ("clickhouse", r"\bclickhouse\b"),
    ("timescaledb", r"\btimescale\s*db\b"),
    ("influxdb", r"\binflux\s*db\b"),
    # Cloud and DevOps
    ("aws", r"\b(?:aws|amazon\s*web\s*services)\b"),
    ("gcp", r"\b(?:gcp|google\s*cloud)\b"),
    ("azure", r"\bazure\b"),
    ("docker", r"\bdocker\b"),
    ("kubernetes", r"\b(?:kubernetes|k8s)\b"),
    ("terraform", r"\bterraform\b"),
    ("ansible", r"\bansible\b"),
    ("jenkins", r"\bjenkins\b"),
    ("github-actions", r"\bgithub\s*actions\b"),
    ("circleci", r"\bcircleci\b"),
    ("gitlab", r"\bgitlab(?:\s*ci)?\b"),
    ("vercel", r"\bvercel\b"),
    ("netlify", r"\bnetlify\b"),
    ("cloudflare", r"\bcloudflare(?:\s*workers)?\b"),
    ("heroku", r"\bheroku\b"),
    ("digitalocean", r"\bdigital\s*ocean\b"),
    ("linode", r"\blinode\b"),
    ("fly", r"\bfly\.io\b"),
    ("railway", r"\brailway\.app\b"),
    ("render", r"\brender\.com\b"),
    ("pulumi", r"\bpulumi\b"),
    ("helm", r"\bhelm\b"),
    ("argocd", r"\bargo\s*cd\b"),
    ("prometheus", r"\bprometheus\b"),
    ("grafana", r"\bgrafana\b"),
    ("datadog", r"\bdatadog\b"),
    ("newrelic", r"\bnew\s*relic\b"),
    ("sentry", r"\bsentry\b"),
    ("pagerduty", r"\bpagerduty\b"),
    ("nginx", r"\bnginx\b"),
    ("apache", r"\bapache\s*(?:http|server)\b"),
    ("caddy", r"\bcaddy\b"),
    ("traefik", r"\btraefik\b"),
    # AI and data
    ("pytorch", r"\bpytorch\b"),
    ("tensorflow", r"\btensorflow\b"),
    ("llm", r"\b(?:llms?|large\s*language\s*models?|gpt|openai|anthropic|claude)\b"),
    ("machine-learning", r"\b(?:machine\s*learning|ml)\b"),
    ("keras", r"\bkeras\b"),
    ("scikit", r"\bscikit[\s-]?learn\b"),
    ("pandas", r"\bpandas\b"),
    ("numpy", r"\bnumpy\b"),
    ("jupyter", r"\bjupyter\b"),
    ("huggingface", r"\bhugging\s*face\b"),
    ("langchain", r"\blangchain\b"),
    ("vector-db", r"\b(?:pinecone|weaviate|qdrant|milvus|chroma\s*db)\b"),
    ("mlops", r"\bmlops\b"),
    ("opencv", r"\bopencv\b"),
    ("spark", r"\b(?:apache\s*)?spark\b"),
    ("airflow", r"\b(?:apache\s*)?airflow\b"),
    ("dbt", r"\bdbt\b"),
    ("snowflake", r"\bsnowflake\b"),
    ("databricks", r"\bdatabricks\b"),
    ("ray", r"\bray\s+(?:framework|serve|tune|cluster)\b"),
    ("rag", r"\b(?:rag|retrieval[\s-]augmented[\s-]generation)\b"),
    # Mobile
    ("react-native", r"\breact[\s-]*native\b"),
    ("flutter", r"\bflutter\b"),
    ("ios", r"\bios\b"),
    ("android", r"\bandroid\b"),
    ("swiftui", r"\bswiftui\b"),
    ("jetpack", r"\bjetpack\s*compose\b"),
    ("xamarin", r"\bxamarin\b"),
    ("capacitor", r"\bcapacitor\b"),
    ("ionic", r"\bionic\b"),
    ("expo", r"\bexpo\b"),
    # Web3
    ("solidity", r"\bsolidity\b"),
    ("web3", r"\bweb3\b"),
    ("ethereum", r"\bethereum\b"),
    ("blockchain", r"\bblockchain\b"),
    ("hardhat", r"\bhardhat\b"),
    ("foundry", r"\bfoundry\b"),
    ("solana", r"\bsolana\b"),
    ("cosmwasm", r"\bcosmwasm\b"),
    ("substrate", r"\bsubstrate\b"),
    ("polkadot", r"\bpolkadot\b"),
    # Messaging
    ("kafka", r"\b(?:apache\s*)?kafka\b"),
    ("rabbitmq", r"\brabbitmq\b"),
    ("sqs", r"\b(?:aws\s*)?sqs\b"),
    ("pubsub", r"\b(?:pub\s*/?\s*sub|google\s*pub\s*sub)\b"),
    ("nats", r"\bnats\b"),
    ("zeromq", r"\b(?:zeromq|zmq)\b"),
    ("celery", r"\bcelery\b"),
    ("bullmq", r"\bbull\s*mq\b"),
    # Testing
    ("jest", r"\bjest\b"),
    ("cypress", r"\bcypress\b"),
    ("playwright", r"\bplaywright\b"),
    ("selenium", r"\bselenium\b"),
    ("pytest", r"\bpytest\b"),
    ("rspec", r"\brspec\b"),
    ("mocha", r"\bmocha\b"),
    ("vitest", r"\bvitest\b"),
    # Misc
    ("graphql", r"\bgraphql\b"),
    ("rest", r"\b(?:rest\s*api|restful)\b"),
    ("grpc", r"\bgrpc\b"),
    ("websocket", r"\bwebsockets?\b"),
    ("tailwind", r"\btailwind(?:css)?\b"),
    ("sass", r"\b(?:sass|scss)\b"),
    ("webpack", r"\bwebpack\b"),
    ("vite", r"\bvite\b"),
    ("esbuild", r"\besbuild\b"),
    ("rollup", r"\brollup\b"),
    ("parcel", r"\bparcel\b"),
    ("turbo", r"\bturbo(?:repo|pack)\b"),
    ("bun", r"\bbun\b"),
    ("deno", r"\bdeno\b"),
    ("storybook", r"\bstorybook\b"),
    ("figma", r"\bfigma\b"),
    ("git", r"\bgit\b"),
    ("linux", r"\blinux\b"),
    ("unix", r"\bunix\b"),
    ("bash", r"\bbash\b"),
    ("zsh", r"\bzsh\b"),
    ("vim", r"\b(?:neo)?vim\b"),
    ("emacs", r"\bemacs\b"),
    ("vscode", r"\bvs\s*code\b"),
    ("oauth", r"\boauth2?\b"),
    ("jwt", r"\bjwt\b"),
    ("saml", r"\bsaml\b"),
    ("sso", r"\bsso\b"),
    ("stripe", r"\bstripe\b"),
    ("twilio", r"\btwilio\b"),
    ("sendgrid", r"\bsendgrid\b"),
    ("segment", r"\bsegment\.(?:io|com)\b|\btwilio\s+segment\b"),
    ("amplitude", r"\bamplitude\b"),
    ("mixpanel", r"\bmixpanel\b"),
])

# Most senior first; the first level whose pattern matches wins
EXPERIENCE_PATTERNS = compile_table([
    ("lead", r"\b(?:lead|principal|staff|architect|manager|director|head\s*of)\b"),
    (
        "senior",
        r"\b(?:senior|sr)\b|\bexperienced\b"
        r"|(?<![\d\-–])(?<![\-–]\s)\b(?:[5-9]|1\d)\+?\s*(?:years?|yrs?)\b",
    ),
    (
        "mid",
        r"\b(?:mid[\s-]*level|intermediate)\b"
        r"|\b(?:3\s*[-–]\s*5|2\s*[-–]\s*4)\s*(?:years?|yrs?)\b"
        r"|(?<![\d\-–])\b[34]\+\s*(?:years?|yrs?)\b",
    ),
    (
        "junior",
        r"\b(?:junior|jr|entry[\s-]*level|new\s*grad|graduate)\b"
        r"|\b[01]\s*[-–]\s*2\s*(?:years?|yrs?)\b",
    ),
])

# Most specific arrangement first
CONTRACT_PATTERNS = compile_table([
    ("freelance", r"\b(?:freelance|freelancer|gig|project[\s-]*based)\b"),
    ("contract", r"\b(?:contract|contractor|c2c|corp[\s-]*to[\s-]*corp)\b"),
    ("part-time", r"\bpart[\s-]*time\b"),
    ("full-time", r"\b(?:full[\s-]*time|permanent|fte)\b"),
])


@dataclass(frozen=True)
class PatternTables:
    """Immutable bundle of every table a SignalExtractor evaluates.

    Attributes:
        tech: Ordered (tag, pattern) pairs; every match contributes a tag
        experience: Ordered (level, pattern) pairs; first match wins
        contract: Ordered (contract type, pattern) pairs; first match wins
        salary: Ordered salary patterns; first plausible match wins
    """

    tech: Tuple[LabeledPattern, ...] = TECH_PATTERNS
    experience: Tuple[LabeledPattern, ...] = EXPERIENCE_PATTERNS
    contract: Tuple[LabeledPattern, ...] = CONTRACT_PATTERNS
    salary: Tuple[SalaryPattern, ...] = DEFAULT_SALARY_PATTERNS


DEFAULT_PATTERN_TABLES = PatternTables()
