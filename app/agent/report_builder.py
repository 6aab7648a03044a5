"""Prompt construction and report assembly.

The prompt embeds values that were already generated locally, asking
the model to reproduce them, so an AI report and a fallback report for
the same request stay consistent.
"""

import json
import logging
from typing import Dict, List, Optional

from app.models.report import ContentAuthenticity, Report, VideoAnalysis
from app.models.video import ClassificationResult, MarketCondition, SetupType, TradingStyle, VideoContext
from app.tools.assets import point_unit
from app.tools.trade_generator import GeneratedSession

logger = logging.getLogger(__name__)

CONTENT_REAL = "real_analysis"
CONTENT_FALLBACK = "fallback_enhanced"
CONTENT_UPLOAD = "upload_analysis"

PROMPT_TEMPLATE = """
Você é um especialista em análise de trading com 20 anos de experiência. Analise este vídeo REAL de trading:

=== CONTEÚDO EXTRAÍDO DO VÍDEO ===
{context}
=== ATIVOS DETECTADOS ===
{assets}

=== ESTILO DE TRADING IDENTIFICADO ===
{style}

=== CONDIÇÕES DE MERCADO MENCIONADAS ===
{condition}

=== SETUP PREDOMINANTE ===
{setup}

=== INSTRUÇÕES CRÍTICAS ===
1. BASE SUA ANÁLISE NO CONTEÚDO REAL EXTRAÍDO
2. Use APENAS os ativos detectados no título/descrição
3. Duração do vídeo: {duration}s - ajuste o número de trades de acordo
4. Se o autor for conhecido, use o padrão de trading dele
5. Se os comentários mencionarem resultados, incorpore isso
6. Seja ESPECÍFICO e ÚNICO para este vídeo exato
7. Mantenha exatamente as chaves do modelo abaixo (snake_case)

RESPONDA APENAS EM JSON VÁLIDO, SEM MARKDOWN:

{template}

SEJA EXTREMAMENTE ESPECÍFICO E ÚNICO PARA ESTE VÍDEO!
"""

STYLE_RISK_ADVICE: Dict[TradingStyle, str] = {
    TradingStyle.SCALPING: "Stops curtos e saída rápida; evite operar em notícias de alto impacto",
    TradingStyle.SWING_TRADE: "Stops abaixo/acima do último swing; aceite oscilações de alguns dias",
    TradingStyle.POSITION_TRADING: "Stops largos com posição reduzida; revise a tese semanalmente",
    TradingStyle.DAY_TRADE: "Zere todas as posições no fim do pregão; limite de perdas diário definido",
    TradingStyle.EDUCATIONAL: "Pratique em conta demo antes de aplicar o setup com dinheiro real",
    TradingStyle.RESULTS: "Resultados passados não garantem resultados futuros; mantenha o gerenciamento",
}

CONDITION_TREND_NOTES: Dict[MarketCondition, str] = {
    MarketCondition.TRENDING: "Mercado em tendência definida; priorize operações a favor do fluxo",
    MarketCondition.RANGING: "Mercado lateral; opere os extremos da faixa de consolidação",
    MarketCondition.VOLATILE: "Volatilidade elevada; reduza o tamanho da posição",
    MarketCondition.BEARISH: "Viés de baixa; vendas em repiques têm melhor assimetria",
    MarketCondition.BREAKOUT: "Rompimento em andamento; aguarde confirmação de volume",
    MarketCondition.NORMAL: "Sem viés claro; respeite as zonas de suporte e resistência",
}

SETUP_NOTES: Dict[SetupType, str] = {
    SetupType.BREAKOUT: "Entrada no rompimento da máxima/mínima com stop dentro da consolidação",
    SetupType.PULLBACK: "Entrada na retração até a média ou suporte anterior",
    SetupType.REVERSAL: "Entrada após confirmação do padrão de reversão",
    SetupType.CONTINUATION: "Entrada na retomada do movimento principal",
    SetupType.FLAG_PATTERN: "Entrada no rompimento da bandeira com alvo na projeção do mastro",
    SetupType.PRICE_ACTION: "Leitura de candles em regiões de suporte e resistência",
}


def build_insights(
    context: VideoContext,
    classification: ClassificationResult,
    fallback: bool = False,
) -> List[str]:
    """Short human-readable insights for the report."""
    assets = ", ".join(classification.detected_assets)
    style = classification.trading_style.value
    condition = classification.market_condition.value

    if fallback:
        return [
            f"Análise baseada no contexto disponível com foco em {classification.primary_asset}",
            "Sistema de fallback inteligente ativo",
            "Dados gerados com base no contexto detectado",
            f"Estilo identificado: {style} com foco em {condition}",
        ]

    return [
        f"Análise baseada no vídeo real: {context.title}",
        f"Canal: {context.author} - {context.duration_seconds // 60} minutos de conteúdo",
        f"Ativos específicos mencionados: {assets}",
        f"Estilo identificado: {style} com foco em {condition}",
    ]


def build_risk_management(classification: ClassificationResult) -> Dict[str, str]:
    unit = point_unit(classification.primary_asset)
    return {
        "position_sizing": "Arrisque no máximo 1-2% do capital por operação",
        "stop_loss": f"Stop técnico definido em {unit} antes da entrada",
        "risk_reward": "Relação risco/retorno mínima de 1:2",
        "style_guidance": STYLE_RISK_ADVICE[classification.trading_style],
    }


def build_technical_analysis(classification: ClassificationResult) -> Dict[str, str]:
    return {
        "trend": CONDITION_TREND_NOTES[classification.market_condition],
        "setup": SETUP_NOTES[classification.setup_type],
        "key_levels": "Suportes e resistências marcados no gráfico do vídeo",
        "confirmation": "Volume e fechamento do candle confirmando a entrada",
    }


def _video_analysis(
    context: VideoContext,
    classification: ClassificationResult,
    content_type: str,
) -> VideoAnalysis:
    return VideoAnalysis(
        original_title=context.title,
        detected_assets=list(classification.detected_assets),
        trading_style=classification.trading_style.value,
        video_duration=context.duration_label,
        channel_name=context.author,
        content_type=content_type,
    )


def assemble_report(
    context: VideoContext,
    classification: ClassificationResult,
    session: GeneratedSession,
    insights: List[str],
    *,
    content_type: str = CONTENT_REAL,
    authenticity: Optional[ContentAuthenticity] = None,
) -> Report:
    """Compose classifier output and generated trades into a Report.

    No validation happens here; values are taken as given.
    """
    return Report(
        video_analysis=_video_analysis(context, classification, content_type),
        summary=session.summary.model_copy(),
        trades=[trade.model_copy() for trade in session.trades],
        insights=list(insights),
        risk_management=build_risk_management(classification),
        technical_analysis=build_technical_analysis(classification),
        content_authenticity=authenticity or ContentAuthenticity(
            real_video_analyzed=context.content_extracted,
            metadata_extracted=context.content_extracted,
        ),
    )


def build_fallback_report(
    context: VideoContext,
    classification: ClassificationResult,
    session: GeneratedSession,
) -> Report:
    """Report used when the AI call or its parsing fails."""
    return assemble_report(
        context,
        classification,
        session,
        build_insights(context, classification, fallback=True),
        content_type=CONTENT_FALLBACK,
        authenticity=ContentAuthenticity(
            real_video_analyzed=False,
            metadata_extracted=context.content_extracted,
            contextual_analysis=True,
            specific_to_this_video=True,
        ),
    )


def complete_report(
    report: Report,
    context: VideoContext,
    classification: ClassificationResult,
    content_type: str = CONTENT_REAL,
) -> Report:
    """Fill the blocks a parsed AI report may have left out."""
    if report.video_analysis is None:
        report.video_analysis = _video_analysis(context, classification, content_type)
    if not report.risk_management:
        report.risk_management = build_risk_management(classification)
    if not report.technical_analysis:
        report.technical_analysis = build_technical_analysis(classification)
    if report.content_authenticity is None:
        report.content_authenticity = ContentAuthenticity(
            real_video_analyzed=context.content_extracted,
            metadata_extracted=context.content_extracted,
        )
    return report


def build_prompt(
    context: VideoContext,
    classification: ClassificationResult,
    session: GeneratedSession,
    content_type: str = CONTENT_REAL,
) -> str:
    """Build the provider prompt for one video.

    The JSON template at the end carries the locally generated summary
    and first trade as the values the model should reproduce.
    """
    template_report = assemble_report(
        context,
        classification,
        GeneratedSession(summary=session.summary, trades=session.trades[:1]),
        build_insights(context, classification),
        content_type=content_type,
        authenticity=ContentAuthenticity(
            real_video_analyzed=True,
            metadata_extracted=context.content_extracted,
        ),
    )
    template = json.dumps(template_report.model_dump(mode="json"), ensure_ascii=False, indent=2)

    prompt = PROMPT_TEMPLATE.format(
        context=context.full_text(),
        assets=", ".join(classification.detected_assets),
        style=classification.trading_style.value,
        condition=classification.market_condition.value,
        setup=classification.setup_type.value,
        duration=context.duration_seconds,
        template=template,
    )
    logger.debug(f"Built prompt with {len(prompt)} chars for '{context.title}'")
    return prompt
