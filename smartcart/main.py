import gradio as gr

from smartcart.config import configure_logging, settings
from smartcart.services.matching_service import ProductMatchingService

configure_logging()
service = ProductMatchingService()

PLATFORMS = ["carrefour", "esselunga", "coop"]
COLUMNS = ["item", "product", "brand", "price", "confidence", "product id", "url"]


def _rows(matches) -> list[list]:
    return [
        [m.original_item, m.matched_product, m.brand, m.price, round(m.confidence, 2), m.product_id, m.product_url]
        for m in matches
    ]


def match_fn(items_text: str, platform: str, semantic: bool, provider: str):
    service.config.semantic_scoring_enabled = semantic
    service.config.ai_provider = provider
    items = [line.strip() for line in (items_text or "").splitlines() if line.strip()]
    matches = service.match_items(items, platform, skip=0)
    return _rows(matches), settings.match_page_size


def load_more_fn(items_text: str, platform: str, skip: int, current_rows):
    items = [line.strip() for line in (items_text or "").splitlines() if line.strip()]
    more = service.match_items(items[:1], platform, skip=int(skip))
    rows = list(current_rows.values.tolist()) if hasattr(current_rows, "values") else list(current_rows or [])
    return rows + _rows(more), int(skip) + settings.match_page_size


def stats_fn() -> dict:
    stats = service.get_catalog_stats().model_dump(by_alias=True)
    stats["providers"] = [p.model_dump() for p in service.available_providers()]
    stats["tokens"] = service.token_usage()
    return stats


def build_demo() -> gr.Blocks:
    with gr.Blocks(title="SmartCart Product Matching") as demo:
        gr.Markdown(
            """
            # SmartCart product matching
            One shopping-list entry per line. Matches come from the local catalog snapshot,
            reranked by the selected AI provider. "Load more" pages through further options for the first entry.
            """
        )
        skip_state = gr.State(0)
        with gr.Row():
            items_box = gr.Textbox(label="Shopping list", lines=6, placeholder="latte\npasta\ncipster")
            with gr.Column():
                platform_box = gr.Dropdown(PLATFORMS, value="carrefour", label="Platform")
                semantic_box = gr.Checkbox(value=service.config.semantic_scoring_enabled, label="Semantic scoring")
                provider_box = gr.Dropdown(["openai", "gemini"], value=service.config.ai_provider, label="AI provider")
        with gr.Row():
            match_btn = gr.Button("Match", variant="primary")
            more_btn = gr.Button("Load more options")
            stats_btn = gr.Button("Catalog stats")
        table = gr.Dataframe(headers=COLUMNS, interactive=False)
        stats_view = gr.JSON(label="Catalog")

        match_btn.click(
            match_fn,
            inputs=[items_box, platform_box, semantic_box, provider_box],
            outputs=[table, skip_state],
        )
        more_btn.click(
            load_more_fn,
            inputs=[items_box, platform_box, skip_state, table],
            outputs=[table, skip_state],
        )
        stats_btn.click(stats_fn, outputs=stats_view)
    return demo


if __name__ == "__main__":
    app = build_demo()
    app.launch(server_name=settings.gradio_server_name, server_port=settings.gradio_server_port)
