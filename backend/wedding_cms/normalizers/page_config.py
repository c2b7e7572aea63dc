def normalize_page_config(page):
    return {
        "key": page.key,
        "label": page.label,
        "path": page.path,
        "content_keys": page.content_keys,
        "sections": [
            {
                "id": section.id,
                "label": section.label,
                "content_keys": list(section.content_keys),
                "repeatable_key": section.repeatable_key,
                "fields": [
                    {
                        "key": field.key,
                        "label": field.label,
                        "type": field.type,
                        "placeholder": field.placeholder,
                    }
                    for field in section.fields
                ],
            }
            for section in page.sections
        ],
    }
