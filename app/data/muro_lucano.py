"""Seed content for the Muro Lucano knowledge base.

Source: the printed guide "Muro Lucano - Meraviglia tra cielo e terra".
Passages are in Italian, the corpus language; ``location`` names the monument
a passage belongs to and is resolved to a monument ID when seeding.
"""

from app.core.schemas_knowledge import ContentType, KnowledgePassage, Monument

VILLAGE = "Muro Lucano"
REGION = "Basilicata"


def _monument(name_it, name_en, name_es, slug, category, description_short, tags, is_featured):
    return Monument(
        name_it=name_it,
        name_en=name_en,
        name_es=name_es,
        slug=slug,
        category=category,
        description_short=description_short,
        village=VILLAGE,
        region=REGION,
        tags=tags,
        is_featured=is_featured,
    )


MONUMENTS: list[Monument] = [
    _monument(
        "Canyon delle Ripe",
        "Ripe Canyon",
        "Cañón de las Ripe",
        "canyon-delle-ripe",
        "nature",
        "Un irripetibile paradiso naturale, profonda gola tra pareti di rocce calcaree",
        ["nature", "canyon", "hiking", "biodiversity"],
        True,
    ),
    _monument(
        "Castello",
        "Castle",
        "Castillo",
        "castello",
        "monument",
        "Castello medievale normanno dell'XI secolo, corona lucente della città",
        ["history", "medieval", "architecture", "castle"],
        True,
    ),
    _monument(
        "Cattedrale",
        "Cathedral",
        "Catedral",
        "cattedrale",
        "religious",
        "Cattedrale a croce latina con origini rupestri del XI secolo",
        ["religion", "church", "architecture", "art"],
        True,
    ),
    _monument(
        "Museo Diocesano",
        "Diocesan Museum",
        "Museo Diocesano",
        "museo-diocesano",
        "museum",
        "Museo che custodisce il prezioso Tesoro di Valadier e i beni della Cattedrale",
        ["museum", "art", "religion", "valadier"],
        False,
    ),
    _monument(
        "Museo Archeologico Nazionale",
        "National Archaeological Museum",
        "Museo Arqueológico Nacional",
        "museo-archeologico",
        "museum",
        "Museo archeologico che racconta la storia della Basilicata Nord-Occidentale",
        ["museum", "archaeology", "history", "ancient"],
        True,
    ),
    _monument(
        "Borgo Pianello",
        "Pianello Village",
        "Pueblo Pianello",
        "borgo-pianello",
        "village",
        "Primo e più antico rione murano, risalente alla fine dell'800 d.C.",
        ["history", "medieval", "village", "architecture"],
        True,
    ),
    _monument(
        "Casa di San Gerardo Maiella",
        "Saint Gerard Maiella House",
        "Casa de San Gerardo Maiella",
        "casa-san-gerardo",
        "religious",
        "Casa natale di San Gerardo Maiella, patrono della Basilicata",
        ["religion", "saint", "history", "museum"],
        True,
    ),
    _monument(
        "Diga e Lago Artificiale Nitti",
        "Nitti Dam and Artificial Lake",
        "Presa y Lago Artificial Nitti",
        "diga-nitti",
        "monument",
        "Prima diga artificiale del Sud Italia, importante opera di archeologia industriale",
        ["engineering", "industrial", "history", "nature"],
        True,
    ),
    _monument(
        "Montagna del Bosco Grande",
        "Bosco Grande Mountain",
        "Montaña del Bosco Grande",
        "bosco-grande",
        "nature",
        "Montagna a 1100 metri con faggi antichi e le grotte dei Vucculi",
        ["nature", "mountain", "forest", "caves", "hiking"],
        True,
    ),
]


PASSAGES: list[KnowledgePassage] = [
    KnowledgePassage(
        title="Canyon delle Ripe - Descrizione",
        content=(
            "Questo è il posto in cui il cielo bacia l'acqua e le ruba la voce. Le Ripe di "
            "Muro Lucano sono un irripetibile paradiso naturale sovrascritto dall'opera tutta "
            "umana che lo ha attraversato e conquistato. La stretta gola nata tra le pareti di "
            "rocce calcaree sedimentarie è il letto del fiume Rescio, interrotto a tratti da "
            "giganti di roccia caduti a seguito dell'erosione delle profonde e ripide pareti."
        ),
        content_type=ContentType.DESCRIPTION,
        category="nature",
        location="Canyon delle Ripe",
        tags=["canyon", "nature", "geology", "fiume rescio"],
        source_page=15,
    ),
    KnowledgePassage(
        title="Canyon delle Ripe - Biodiversità",
        content=(
            "Felci e licheni ricoprono le rocce ricche di bocche di leone, equiseto, campanule "
            "e garofani selvatici. Il cielo delle Ripe è mappa per poiane, rondoni, nibbi "
            "imperiali, gheppi e falchi pellegrini. Il corvo imperiale e le cicogne nere hanno "
            "trovato rifugio sicuro tra gli anfratti rocciosi."
        ),
        content_type=ContentType.NATURE,
        category="nature",
        location="Canyon delle Ripe",
        tags=["biodiversity", "flora", "fauna", "cicogne nere"],
        source_page=15,
    ),
    KnowledgePassage(
        title="Castello - Storia Medievale",
        content=(
            "Quello che era stato un piccolo forte di epoca longobarda diventerà nel XI secolo "
            "realtà chiara nei progetti di edificazione dei Normanni, giunti sulle colline murane "
            "durante la campagna di conquista dell'Italia meridionale. A partire dal 1269 il "
            "castello sarà parte dei beni della Corona. Il castello e la torre furono parte del "
            "destino crudele della Regina Giovanna I d'Angiò, soffocata nel 1382 per ordine di "
            "Carlo di Durazzo."
        ),
        content_type=ContentType.HISTORY,
        category="monument",
        location="Castello",
        tags=["medieval", "normans", "queen giovanna"],
        source_page=17,
    ),
    KnowledgePassage(
        title="Castello - Epoca Orsina",
        content=(
            "Nel 1483 il Re di Napoli Ferrante d'Aragona fece del castello una contea del suo "
            "regno. Il conte Mazzeo Ferrillo realizzò il ponte levatoio e le due torri. Il "
            "matrimonio tra sua nipote Beatrice e Ferdinando Orsini, duca di Gravina, segna "
            "l'inizio dell'età orsina, conclusa solo nel 1806 con l'abolizione dei diritti feudali."
        ),
        content_type=ContentType.HISTORY,
        category="monument",
        location="Castello",
        tags=["renaissance", "orsini family", "nobility"],
        source_page=17,
    ),
    KnowledgePassage(
        title="Cattedrale - Scoperta Rupestre",
        content=(
            "Per l'intero territorio il sisma del 1980 fu ferita insanabile. La Cattedrale vide "
            "distrutti gli affreschi delle sue volte, eppure il sisma divenne disvelamento: al di "
            "sotto della cattedrale apparvero le rovine di una chiesa a tre navate e cinque degli "
            "otto pilastri su cui erano posate."
        ),
        content_type=ContentType.HISTORY,
        category="religious",
        location="Cattedrale",
        tags=["archaeology", "earthquake", "discovery"],
        source_page=19,
    ),
    KnowledgePassage(
        title="Museo Diocesano - Tesoro Valadier",
        content=(
            "Muro Lucano custodisce il servizio in argento dorato per pontificale e i paramenti "
            "preziosi del Tesoro del Cardinale Orsini realizzato dal maestro Luigi Valadier, il "
            "più noto orafo, ebanista e fonditore del 1700. Le opere hanno attraversato il mare "
            "per la mostra dedicata a Valadier a New York nel 2018."
        ),
        content_type=ContentType.DESCRIPTION,
        category="museum",
        location="Museo Diocesano",
        tags=["art", "valadier", "silverwork", "treasure"],
        source_page=21,
    ),
    KnowledgePassage(
        title="San Gerardo Maiella - Vita del Santo",
        content=(
            "Al civico 65 del Borgo Pianello nasce il 6 aprile 1726 San Gerardo. L'umile casa "
            "in cui visse fino a sei o sette anni è sollevata di pochi gradini sulla viuzza in "
            "pietra del Borgo. A Materdomini, a soli 29 anni, Gerardo lasciò la vita terrena: "
            "\"vado a farmi santo\" disse di sé, e santo fu."
        ),
        content_type=ContentType.HISTORY,
        category="religious",
        location="Casa di San Gerardo Maiella",
        tags=["saint", "biography", "religion", "patrono basilicata"],
        source_page=33,
    ),
    KnowledgePassage(
        title="Eventi - Sagra della Patata",
        content=(
            "La Patata di Montagna di Muro Lucano, marchio De.C.O., è celebrata dalla Sagra della "
            "Patata di Montagna, la cui prima edizione risale al 2009. L'evento settembrino ospita "
            "più di 20 mila presenze nelle tre giornate di manifestazione."
        ),
        content_type=ContentType.EVENT,
        category="food",
        location="Muro Lucano",
        tags=["festival", "food", "potato", "tradition"],
        source_page=47,
    ),
    KnowledgePassage(
        title="Eventi - Festa di San Gerardo",
        content=(
            "La festa patronale di San Gerardo, il 2 settembre, include processioni religiose e "
            "fuochi d'artificio. Segue di pochi giorni Borgo InVita, momento di musica e "
            "convivialità che accende i vicoli di Borgo Pianello."
        ),
        content_type=ContentType.EVENT,
        category="religious",
        location="Muro Lucano",
        tags=["festival", "san gerardo", "tradition", "religion"],
        source_page=47,
    ),
    KnowledgePassage(
        title="Prodotti Tipici - Eccellenze Gastronomiche",
        content=(
            "Eccellenze territoriali sono il miele, lo zafferano, il tartufo, l'olio, la birra, "
            "i fagioli bianchi e i formaggi dell'area, dal pecorino al cacioricotta, alla "
            "scamorza e al provolone. Menzione speciale per la carne di agnello."
        ),
        content_type=ContentType.FOOD,
        category="food",
        location="Muro Lucano",
        tags=["food", "local products", "gastronomy", "cheese", "honey"],
        source_page=47,
    ),
    KnowledgePassage(
        title="Storia - Origini di Numistrum",
        content=(
            "Muro Lucano nasce Numistrum, nella zona che oggi è Raia San Basilio. Numistrum fu "
            "teatro della battaglia che nel 210 a.C. vide Annibale a capo dell'esercito "
            "cartaginese e il console romano Claudio Marcello affrontarsi in campo aperto, "
            "durante la Seconda Guerra Punica."
        ),
        content_type=ContentType.HISTORY,
        category="history",
        location="Muro Lucano",
        tags=["ancient history", "roman", "hannibal", "numistrum"],
        source_page=7,
    ),
    KnowledgePassage(
        title="Personaggi Illustri - Joseph Stella",
        content=(
            "Joseph Stella, primo pittore futurista d'America, nacque a Muro Lucano nel giugno "
            "1877. Nelle sue opere l'America ammirò linee e tratti che sembrano rievocare scorci "
            "muresi, eco delle Ripe."
        ),
        content_type=ContentType.STORY,
        category="culture",
        location="Muro Lucano",
        tags=["art", "futurism", "famous people", "joseph stella"],
        source_page=9,
    ),
]
