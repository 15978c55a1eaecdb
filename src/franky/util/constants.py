"""
Constants for the bot.
"""

from franky.datatypes.anime_datatypes import AnimeQuote

ANILIST_UNAVAILABLE = "AniList is not responding right now. Please try again later."
ADMIN_ONLY = "❌ Admin only."
AIRING_USAGE = "Usage: `/airing <title> [timezone]`. Give me a title to look up."

# /mute durations, in seconds
DURATIONS = {
    "60 secs": 60,
    "5 mins": 5 * 60,
    "10 mins": 10 * 60,
    "30 mins": 30 * 60,
    "1 hour": 60 * 60,
    "2 hours": 2 * 60 * 60,
    "1 day": 24 * 60 * 60,
    "1 week": 7 * 24 * 60 * 60,
}

DURATION_CHOICES = list(DURATIONS.keys())

PURGE_MIN = 1
PURGE_MAX = 100

HELP_TEXT = "\n".join(
    [
        "{name} — Commands",
        "",
        "• /airing <title>",
        "• /calendar",
        "• /recommend <vibe>",
        "• /quote",
        "• /guess_anime",
        "• /ping",
        "• /diag",
        "",
        "Moderation (admins):",
        "",
        "• /ban @user • /mute @user 10 mins • /purge 25",
    ]
)

ANIME_QUOTES = (
    AnimeQuote("People live their lives bound by what they accept as correct and true. That's how they define reality.", "Itachi Uchiha"),
    AnimeQuote("Wake up to reality! Nothing ever goes as planned in this world.", "Madara Uchiha"),
    AnimeQuote("If you don't like your destiny, don't accept it. Instead, have the courage to change it the way you want it to be.", "Naruto Uzumaki"),
    AnimeQuote("A dropout will beat a genius through hard work.", "Rock Lee"),
    AnimeQuote("A true master is an eternal student.", "Kenshin Himura"),
    AnimeQuote("The sword that kills is also the sword that saves. That is what the reverse blade is for.", "Kenshin Himura"),
    AnimeQuote("A lesson without pain is meaningless. That's because no one can gain without sacrificing something.", "Edward Elric"),
    AnimeQuote("A human's life span is too short to leave regrets behind.", "Alphonse Elric"),
    AnimeQuote("There's no such thing as a painless lesson. They just don't exist. Sacrifices are necessary. You can't gain anything without losing something first.", "Edward Elric"),
    AnimeQuote("Stand up and walk. Keep moving forward. You've got two good legs.", "Edward Elric"),
    AnimeQuote("To know sorrow is not terrifying. What is terrifying is to know you can't go back to happiness you could have.", "Matsumoto Rangiku"),
    AnimeQuote("If you want to know who you are, you have to look at your real self and acknowledge what you see.", "Urahara Kisuke"),
    AnimeQuote("Reject common sense to make the impossible possible.", "Kamina"),
    AnimeQuote("Don't believe in yourself. Believe in me! Believe in the Kamina who believes in you!", "Kamina"),
    AnimeQuote("The world is not perfect, but it's there for us trying the best it can.", "Spike Spiegel"),
    AnimeQuote("Whatever happens, happens.", "Spike Spiegel"),
    AnimeQuote("It's not about whether you win or lose, it's how good you looked doing it.", "Spike Spiegel"),
    AnimeQuote("No matter how hard or impossible it is, never lose sight of your goal.", "Monkey D. Luffy"),
    AnimeQuote("I don't want to conquer anything. I just think the guy with the most freedom in this whole ocean... is the Pirate King!", "Monkey D. Luffy"),
    AnimeQuote("I am a man who wants to become a swordsman that can cut nothing.", "Zoro Roronoa"),
    AnimeQuote("When do you think people die? When they are shot through the heart? No. When they are ravaged by an incurable disease? No. It's when they are forgotten.", "Dr. Hiriluk"),
    AnimeQuote("The difference between the novice and the master is that the master has failed more times than the novice has tried.", "Koro-sensei"),
    AnimeQuote("Even if we forget the faces of our friends, we will never forget the bonds that were carved into our souls.", "Ichigo Kurosaki"),
    AnimeQuote("If you don't take risks, you can't create a future!", "Monkey D. Luffy"),
    AnimeQuote("Being weak is nothing to be ashamed of. Staying weak is!", "Fuegoleon Vermillion"),
    AnimeQuote("The moment you think of giving up, think of the reason why you held on so long.", "Natsu Dragneel"),
    AnimeQuote("Sometimes life is like this tunnel. You can't always see the light at the end of the tunnel, but if you keep moving, you will come to a better place.", "Iroh"),
    AnimeQuote("In the darkest times, hope is something you give yourself. That is the meaning of inner strength.", "Iroh"),
    AnimeQuote("It is important to draw wisdom from different places. If you take it from only one place, it becomes rigid and stale.", "Iroh"),
    AnimeQuote("Pride is not the opposite of shame, but its source. True humility is the only antidote to shame.", "Iroh"),
    AnimeQuote("You are stronger than you believe. You have greater powers than you know.", "Aang"),
    AnimeQuote("There's nothing wrong with letting people who love you help you.", "Uncle Iroh"),
)
